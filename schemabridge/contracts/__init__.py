"""
Contracts Module

Shared types used by every layer: error codes and exceptions, the parsed
type signature, and the module registry collaborator interface.

DESIGN PRINCIPLES:
==================
1. Data types are immutable (frozen dataclasses)
2. Every failure mode has an explicit ErrorCode
3. Collaborators are abstract interfaces, never process-wide singletons
"""
