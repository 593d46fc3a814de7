"""Guarded end-to-end processing of operation batches."""

from .lib import (
    OperationRejected,
    OperationsRejected,
    PipelineResult,
    ReferenceRejected,
    ResultRejected,
    SchemaRejected,
    process_operations,
    summarize_operation,
)

__all__ = [
    "OperationRejected",
    "OperationsRejected",
    "PipelineResult",
    "ReferenceRejected",
    "ResultRejected",
    "SchemaRejected",
    "process_operations",
    "summarize_operation",
]
