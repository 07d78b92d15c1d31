"""
SEPA XML Core

Configuration, exceptions and logging setup shared by all packages.
"""

from sepa_xml.core.config import LogLevel, SEPAConfig, load_config
from sepa_xml.core.exceptions import (
    ConfigurationException,
    MissingRequiredTemporalException,
    SEPAXMLException,
    TypeMismatchException,
    UnknownFormatException,
)
from sepa_xml.core.logging_config import configure_logging

__all__ = [
    "LogLevel",
    "SEPAConfig",
    "load_config",
    "configure_logging",
    "SEPAXMLException",
    "ConfigurationException",
    "TypeMismatchException",
    "UnknownFormatException",
    "MissingRequiredTemporalException",
]
