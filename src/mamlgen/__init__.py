"""mamlgen - MAML help generation for Python cmdlets

Cmdlets are classes deriving from mamlgen.declarations.Cmdlet and decorated
with @cmdlet. mamlgen reads their parameter declarations and documentation
(declarations, companion XML doc comments, docstrings) and writes PowerShell
MAML help XML.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
