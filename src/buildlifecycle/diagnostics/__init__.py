"""
Diagnostic tooling launched when a CI build hangs.
"""
