"""SQL dialects: literal styles, identifier quoting and dialect-specific rendering hooks.

Dialect modules register themselves on import; ``safesql`` imports the built-in ones.
"""
