import pytest

from inventario.business.common.errors import ErrorCode


class TestProveedoresController:
    async def test_create_and_get(self, proveedores_controller):
        response = await proveedores_controller.create_proveedor(
            {"nombre": "ACME", "contacto": "Ana", "telefono": "555"}
        )
        assert response.success
        assert response.message == "Proveedor creado exitosamente"

        leido = await proveedores_controller.get_proveedor_by_id(response.data.id)
        assert leido.data.nombre == "ACME"
        assert leido.data.contacto == "Ana"

    async def test_create_requires_name(self, proveedores_controller):
        response = await proveedores_controller.create_proveedor({"nombre": ""})
        assert response.success is False
        assert response.error_code == ErrorCode.VALIDATION_ERROR
        assert response.error == "El nombre del proveedor es obligatorio"

    async def test_update_rejects_empty_name(self, proveedores_controller):
        creado = (await proveedores_controller.create_proveedor({"nombre": "ACME"})).data
        response = await proveedores_controller.update_proveedor(creado.id, {"nombre": " "})
        assert response.success is False
        assert response.error == "El nombre del proveedor no puede estar vacío"

    async def test_update_rejects_unknown_field(self, proveedores_controller):
        creado = (await proveedores_controller.create_proveedor({"nombre": "ACME"})).data
        response = await proveedores_controller.update_proveedor(creado.id, {"email": "a@b.c"})
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    async def test_update_partial(self, proveedores_controller):
        creado = (await proveedores_controller.create_proveedor(
            {"nombre": "ACME", "contacto": "Ana"}
        )).data
        response = await proveedores_controller.update_proveedor(creado.id, {"telefono": "777"})
        assert response.success
        assert response.data.nombre == "ACME"
        assert response.data.contacto == "Ana"
        assert response.data.telefono == "777"

    async def test_get_all(self, proveedores_controller):
        await proveedores_controller.create_proveedor({"nombre": "Zeta"})
        await proveedores_controller.create_proveedor({"nombre": "Alfa"})
        response = await proveedores_controller.get_all_proveedores()
        assert [p.nombre for p in response.data] == ["Alfa", "Zeta"]
        assert response.message == "2 proveedores encontrados"

    async def test_missing_supplier(self, proveedores_controller):
        assert (await proveedores_controller.get_proveedor_by_id(3)).error_code == ErrorCode.NOT_FOUND
        assert (await proveedores_controller.update_proveedor(3, {"nombre": "X"})).error_code == ErrorCode.NOT_FOUND
        assert (await proveedores_controller.delete_proveedor(3)).error_code == ErrorCode.NOT_FOUND


class TestSupplierDeletionScenario:
    async def test_acme_widget(self, proveedores_controller, productos_controller):
        acme = await proveedores_controller.create_proveedor({"nombre": "ACME"})
        assert acme.data.id == 1

        widget = await productos_controller.create_producto(
            {"nombre": "Widget", "costo": 500, "publico": 900, "id_proveedor": 1}
        )
        assert widget.data.id == 1

        leido = (await productos_controller.get_producto_by_id(1)).data
        assert leido.nombre == "Widget"
        assert leido.costo == 500
        assert leido.publico == 900
        assert leido.id_proveedor == 1
        assert leido.proveedor_nombre == "ACME"

        borrado = await proveedores_controller.delete_proveedor(1)
        assert borrado.success is True

        leido = (await productos_controller.get_producto_by_id(1)).data
        assert leido.id_proveedor is None
        assert leido.proveedor_nombre is None
        assert (await productos_controller.get_productos_by_proveedor(1)).data == []


class TestProveedorPatchNulls:
    @pytest.mark.parametrize("nombre", [None, ""])
    async def test_update_rejects_missing_name(self, proveedores_controller, nombre):
        creado = (await proveedores_controller.create_proveedor({"nombre": "ACME"})).data
        response = await proveedores_controller.update_proveedor(creado.id, {"nombre": nombre})
        assert response.success is False
        assert response.error_code == ErrorCode.VALIDATION_ERROR

        leido = (await proveedores_controller.get_proveedor_by_id(creado.id)).data
        assert leido.nombre == "ACME"

    async def test_update_clears_optional_fields(self, proveedores_controller):
        creado = (await proveedores_controller.create_proveedor(
            {"nombre": "ACME", "contacto": "Ana", "telefono": "555"}
        )).data
        response = await proveedores_controller.update_proveedor(creado.id, {"contacto": None})
        assert response.success
        assert response.data.contacto is None
        assert response.data.telefono == "555"
