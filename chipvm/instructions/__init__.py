"""Instruction handlers, one module per instruction family.

Every handler takes ``(state, instruction)`` and returns ``(state, cursor)``.
"""
