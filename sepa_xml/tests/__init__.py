"""
SEPA XML Tests

Test suite for the pain document model, the XML builder, the check digit
helpers and configuration.
"""
