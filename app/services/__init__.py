"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services orchestrate repository calls, own the transaction boundary for
multi-statement writes, and map persistence errors to HTTP errors.
"""
