"""
mutant: command-line front end for a mutation-testing tool.

The package turns raw process arguments into an immutable run
configuration and maps the outcome of a run to a process exit code.
"""

__version__ = "0.6.0"
