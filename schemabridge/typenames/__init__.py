"""
Type Names Layer

Parse and serialize qualified type names, and rebind their module
references to the module versions actually loaded.
"""
