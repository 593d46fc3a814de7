"""Operation applicator.

Applies an ordered operation batch to a copy of a schema document. Each
operation runs inside its own failure boundary against a scratch copy
that is committed only when the operation completes, so a failing
operation leaves the working document exactly as it was. Failures and
policy skips become warnings; nothing raises past apply_operations.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import ValidationError

from dashboard_engine.config import EnvVar, get_environment
from dashboard_engine.operations import OperationSkipped, apply_operation, parse_operation
from dashboard_engine.schema import DesignSchema

logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """Outcome of applying an operation batch.

    Attributes:
        schema: The resulting schema document.
        warnings: Human-readable warnings, one per skipped or failed
            operation. Empty on full success.
    """

    schema: dict[str, Any]
    warnings: list[str] = field(default_factory=list)

    @property
    def fully_applied(self) -> bool:
        return not self.warnings


def _op_label(raw: Any) -> str:
    op = getattr(raw, "op", None)
    if op is None and isinstance(raw, dict):
        op = raw.get("op")
    return str(op) if op is not None else "<unknown>"


def _failure_message(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        detail = first.get("msg", str(exc))
        return f"{location}: {detail}" if location else detail
    return str(exc)


def apply_operations(
    schema: dict[str, Any] | DesignSchema,
    operations: Iterable[Any],
    *,
    warn_on_missing_target: bool | None = None,
) -> ApplyResult:
    """Apply operations to a copy of a schema, strictly in list order.

    Args:
        schema: Schema document (or typed model). Never mutated.
        operations: Operation models or loosely typed operation dicts.
        warn_on_missing_target: Record a warning when a path selector
            matches no component. None reads
            DASHBOARD_WARN_ON_MISSING_TARGET.

    Returns:
        ApplyResult with the new document and any warnings.
    """
    if warn_on_missing_target is None:
        warn_on_missing_target = get_environment(EnvVar.DASHBOARD_WARN_ON_MISSING_TARGET)

    if isinstance(schema, DesignSchema):
        document = schema.to_document()
    else:
        document = copy.deepcopy(schema)

    # Theme baseline for required-field restoration is the input schema.
    baseline = {"theme": copy.deepcopy(document.get("theme"))}
    warnings: list[str] = []

    for index, raw in enumerate(operations):
        label = _op_label(raw)
        try:
            operation = parse_operation(raw)
            scratch = copy.deepcopy(document)
            apply_operation(
                scratch,
                operation,
                baseline,
                warn_on_missing_target=bool(warn_on_missing_target),
            )
        except OperationSkipped as e:
            logger.warning(f"Operation {index} ({label}) skipped: {e}")
            warnings.append(str(e))
            continue
        except Exception as e:
            message = f"Failed to apply operation {label}: {_failure_message(e)}"
            logger.warning(message)
            warnings.append(message)
            continue

        document = scratch
        logger.debug(f"Applied operation {index} ({label})")

    return ApplyResult(schema=document, warnings=warnings)
