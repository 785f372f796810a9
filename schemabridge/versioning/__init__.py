"""
Versioning Layer

Versioned record contracts and the forward migration chain that turns data of
any older version into a fully populated current-version record.

WHY A CHAIN:
- Each record version only knows its immediate predecessor
- Old data is read at its own version, then upgraded one step at a time
- The chain is fixed when the record classes are written, never at runtime
"""
