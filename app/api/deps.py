"""FastAPI 의존성 주입 모듈.

FastAPI dependency injection module.
Provides the service instances used by routers so tests can override them
through ``app.dependency_overrides``.
"""

from app.services.product_service import ProductService, product_service


def get_product_service() -> ProductService:
    """상품 서비스 인스턴스를 반환합니다 (Return the product service)."""
    return product_service
