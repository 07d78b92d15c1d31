"""
Document Validation Results

Validators collect issues instead of raising, so a caller sees every
problem of a document at once. Each issue names the entity it belongs to
(message, batch or transaction id) and the offending field of that entity.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ValidationSeverity(Enum):
    """Severity of a validation issue."""

    WARNING = "warning"  # Serializable, but data is dropped or replaced
    ERROR = "error"  # Serialization fails or the bank rejects the file
    CRITICAL = "critical"  # Input could not be inspected at all

    @property
    def blocking(self) -> bool:
        return self is not ValidationSeverity.WARNING


@dataclass
class ValidationIssue:
    """A single finding against one entity of a document."""

    code: str
    message: str
    entity_id: str = ""
    field_name: str = ""
    severity: ValidationSeverity = ValidationSeverity.ERROR
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        if self.entity_id and self.field_name:
            return f"{self.entity_id}/{self.field_name}"
        return self.entity_id or self.field_name


@dataclass
class ValidationResult:
    """Issues found by one validator run."""

    validator_name: str = ""
    strict: bool = False
    issues: List[ValidationIssue] = field(default_factory=list)

    def add_error(
        self,
        code: str,
        message: str,
        entity_id: str = "",
        field: str = "",
        severity: ValidationSeverity = ValidationSeverity.ERROR,
        **details,
    ) -> None:
        self.issues.append(
            ValidationIssue(code, message, entity_id, field, severity, details)
        )

    def add_warning(
        self,
        code: str,
        message: str,
        entity_id: str = "",
        field: str = "",
        **details,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                code, message, entity_id, field, ValidationSeverity.WARNING, details
            )
        )

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity.blocking]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if not i.severity.blocking]

    @property
    def is_valid(self) -> bool:
        """No errors; in strict mode no warnings either."""
        if self.strict:
            return not self.issues
        return not self.errors

    @property
    def error_codes(self) -> List[str]:
        return [e.code for e in self.errors]

    @property
    def warning_codes(self) -> List[str]:
        return [w.code for w in self.warnings]

    @property
    def has_critical_errors(self) -> bool:
        return any(i.severity is ValidationSeverity.CRITICAL for i in self.issues)

    def by_entity(self) -> Dict[str, List[ValidationIssue]]:
        """Group issues by entity id, in the order entities were reported."""
        grouped: Dict[str, List[ValidationIssue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.entity_id, []).append(issue)
        return grouped


class BaseValidator(ABC):
    """Abstract base class for document validators."""

    def __init__(self, strict: bool = False):
        """
        Initialize validator.

        Args:
            strict: If True, warnings make the result invalid
        """
        self.strict = strict

    @property
    @abstractmethod
    def name(self) -> str:
        """Return validator name."""

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """Validate the provided data."""

    def _create_result(self) -> ValidationResult:
        return ValidationResult(validator_name=self.name, strict=self.strict)
