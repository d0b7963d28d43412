"""
Core domain models, pricing primitives, and invariants.

Модуль содержит базовые строительные блоки, не зависящие от внешних систем
(decrypt oracle, event sink, presentation layer).
"""
