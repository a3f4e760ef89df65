"""
Application use cases

One class per operation. Every ``execute`` returns ``Result[T]``.
"""
