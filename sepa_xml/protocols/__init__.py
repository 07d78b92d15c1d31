"""
SEPA XML Protocols

Message protocol handlers. Currently the pain (payment initiation) family.
"""
