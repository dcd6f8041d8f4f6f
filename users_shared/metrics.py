"""
CloudWatch metrics utility for Lambda handlers.

This module provides a metrics client that batches custom CloudWatch
datapoints (validation failures, error counts) and publishes them in one go.

Follows steering rules:
- Explicit over implicit
- Fail fast on invalid input
- No global mutable state
"""

import boto3
from typing import Dict, Any, Optional, List
from datetime import datetime, timezone

from .config import DEFAULT_METRICS_NAMESPACE


# CloudWatch PutMetricData accepts at most 20 datapoints per request
MAX_BATCH_SIZE = 20


class MetricsClient:
    """
    CloudWatch metrics client for Lambda handlers.
    
    Usage:
        metrics = MetricsClient(operation='users-profile-update', enabled=True)
        metrics.emit_error(error_code='VALIDATION_ERROR')
        metrics.publish()
    
    When disabled, datapoints are still collected (so callers behave the same)
    but no boto3 client is created and publish() only clears the batch.
    """
    
    def __init__(
        self,
        operation: str,
        namespace: str = DEFAULT_METRICS_NAMESPACE,
        enabled: bool = True,
        cloudwatch: Any = None
    ):
        if not operation or not operation.strip():
            raise ValueError('Operation name is required for metrics')
        
        self.operation = operation
        self.namespace = namespace
        self.enabled = enabled
        self._cloudwatch = cloudwatch
        self._metric_data: List[Dict[str, Any]] = []
    
    @property
    def cloudwatch(self) -> Any:
        if self._cloudwatch is None:
            self._cloudwatch = boto3.client('cloudwatch')
        return self._cloudwatch
    
    @property
    def pending(self) -> List[Dict[str, Any]]:
        """Datapoints collected but not yet published."""
        return list(self._metric_data)
    
    def _add_metric(
        self,
        metric_name: str,
        value: float,
        unit: str,
        dimensions: Optional[List[Dict[str, str]]] = None
    ) -> None:
        all_dimensions = [
            {
                'Name': 'Operation',
                'Value': self.operation
            }
        ]
        if dimensions:
            all_dimensions.extend(dimensions)
        
        self._metric_data.append({
            'MetricName': metric_name,
            'Value': value,
            'Unit': unit,
            'Timestamp': datetime.now(timezone.utc),
            'Dimensions': all_dimensions
        })
    
    def emit_error(self, error_code: Optional[str] = None) -> None:
        """
        Emit error metric.
        
        Optionally includes error code as a dimension for detailed error tracking.
        
        Args:
            error_code: Error code (e.g., 'VALIDATION_ERROR') (optional)
        """
        dimensions = []
        if error_code:
            dimensions.append({
                'Name': 'ErrorCode',
                'Value': error_code
            })
        
        self._add_metric(
            metric_name='ErrorCount',
            value=1.0,
            unit='Count',
            dimensions=dimensions or None
        )
    
    def emit_field_errors(self, count: int) -> None:
        """Emit the number of field errors reported by one validation."""
        if count < 0:
            raise ValueError('Field error count must be non-negative')
        
        self._add_metric(
            metric_name='FieldErrorCount',
            value=float(count),
            unit='Count'
        )
    
    def publish(self) -> None:
        """
        Publish all accumulated metrics to CloudWatch in batches of 20.
        
        Publishing failures are reported but never raised: metrics are
        important but not critical to request success.
        """
        if not self._metric_data:
            return
        
        if not self.enabled:
            self._metric_data = []
            return
        
        try:
            for i in range(0, len(self._metric_data), MAX_BATCH_SIZE):
                batch = self._metric_data[i:i + MAX_BATCH_SIZE]
                self.cloudwatch.put_metric_data(
                    Namespace=self.namespace,
                    MetricData=batch
                )
        except Exception as error:
            print(f'Failed to publish metrics: {error}')
        finally:
            # Never retry a batch
            self._metric_data = []


def create_metrics_client(operation: str, config: Dict[str, Any]) -> MetricsClient:
    """
    Create a metrics client for a Lambda operation.
    
    Args:
        operation: Operation name (e.g., 'users-profile-update')
        config: Configuration as returned by load_config()
        
    Returns:
        MetricsClient instance
    """
    return MetricsClient(
        operation,
        namespace=config['metrics_namespace'],
        enabled=config['metrics_enabled']
    )
