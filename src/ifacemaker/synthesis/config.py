"""
Configuration for interface synthesis.
"""

# Header comment used when none is given on the command line
DEFAULT_COMMENT = "Code generated by ifacemaker; DO NOT EDIT."

# Interface comment template; filled with the interface name
DEFAULT_IFACE_COMMENT = "{iface} ..."

# Comments starting with one of these are compiler directives and must not
# get a space after the "//" marker
DIRECTIVE_PREFIXES = ("go:generate",)

COMMENT_PREFIX = "// "
DIRECTIVE_COMMENT_PREFIX = "//"
