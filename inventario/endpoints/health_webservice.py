from fastapi import APIRouter, Request
from fastapi_utils.cbv import cbv


health_webservice_api_router = APIRouter()


@cbv(health_webservice_api_router)
class HealthWebService:
    @health_webservice_api_router.get("/health")
    async def health(self, request: Request):
        database = request.app.state.database
        return {
            "status": "healthy" if database.is_open else "starting",
            "database": database.settings.db_path,
        }
