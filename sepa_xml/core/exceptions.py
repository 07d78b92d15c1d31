"""
SEPA XML - Custom Exceptions

This module defines the exception classes raised while building and
serializing SEPA payment initiation documents.
"""

from typing import Any, Dict, Optional


class SEPAXMLException(Exception):
    """Base exception for all SEPA XML errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "SEPA_XML_ERROR"
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (Code: {self.error_code}, Context: {self.context})"
        return f"{self.message} (Code: {self.error_code})"


class ConfigurationException(SEPAXMLException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context={"config_key": config_key} if config_key else {},
        )


class TypeMismatchException(SEPAXMLException):
    """Exception raised when an entity of the wrong kind is attached to a container."""

    def __init__(
        self,
        message: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ):
        context = {}
        if expected:
            context["expected"] = expected
        if actual:
            context["actual"] = actual

        super().__init__(message, error_code="TYPE_MISMATCH", context=context)


class UnknownFormatException(SEPAXMLException):
    """Exception raised for pain format identifiers missing from the registry."""

    def __init__(self, message: str, pain_format: Optional[str] = None):
        context = {"pain_format": pain_format} if pain_format else {}
        super().__init__(message, error_code="UNKNOWN_FORMAT", context=context)


class MissingRequiredTemporalException(SEPAXMLException):
    """Exception raised when a date required by the payment method is absent."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        entity_id: Optional[str] = None,
    ):
        context = {}
        if field_name:
            context["field"] = field_name
        if entity_id:
            context["entity_id"] = entity_id

        super().__init__(
            message, error_code="MISSING_REQUIRED_TEMPORAL", context=context
        )
