"""
Codec Layer

Envelope framing around an opaque payload, and the structured document
format used for payloads. This layer knows nothing about record types.
"""
