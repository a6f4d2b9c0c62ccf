from fastapi import Request

from ..business.controllers.productos_controller import ProductosController
from ..business.controllers.proveedores_controller import ProveedoresController


def get_productos_controller(request: Request) -> ProductosController:
    return request.app.state.productos_controller


def get_proveedores_controller(request: Request) -> ProveedoresController:
    return request.app.state.proveedores_controller
