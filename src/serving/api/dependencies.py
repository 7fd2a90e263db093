"""
FastAPI Dependencies
"""

from fastapi import Request

from src.engine.service import SalesDataService


def get_sales_service(request: Request) -> SalesDataService:
    """The service instance created with the app"""
    return request.app.state.sales_service
