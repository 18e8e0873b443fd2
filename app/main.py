"""FastAPI Backend for the Project Network service"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pmnet.errors import PmNetError
from pmnet.io_utils import load_constants
from pmnet.logging import configure_logging, get_logger
from pmnet.models import NetworkConstants
from pmnet.network import ProjectNetwork

logger = get_logger(__name__)


def create_app(constants: Optional[NetworkConstants] = None) -> FastAPI:
    """Build the API around one ProjectNetwork; the network holds no request state"""
    constants = constants or load_constants()
    network = ProjectNetwork(constants)

    app = FastAPI(title="Project Network Service", version="1.0.0")
    app.state.network = network

    # Enable CORS for the chart frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=constants.cors.allow_origins,
        allow_credentials=constants.cors.allow_credentials,
        allow_methods=constants.cors.allow_methods,
        allow_headers=constants.cors.allow_headers,
    )

    @app.exception_handler(PmNetError)
    async def pmnet_error_handler(request: Request, exc: PmNetError):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_report().model_dump(mode="json"),
        )

    # API Endpoints
    @app.get("/api/activity_properties")
    def get_activity_properties():
        """Validated activities from the activity properties file"""
        return network.get_activities().model_dump(mode="json", by_alias=True)

    @app.get("/api/adjacency_matrix")
    def get_adjacency_matrix():
        """Validated 0/1 precedence matrix"""
        return network.get_adjacency().model_dump(mode="json", by_alias=True)

    @app.get("/api/pm_combined")
    def get_pm_combined():
        """Links between activities with their gap in days"""
        return network.get_combined_graph().model_dump(mode="json", by_alias=True)

    logger.info(
        "app_created",
        data_dir=network.data_dir,
        activity_file=network.activity_file,
        adjacency_file=network.adjacency_file,
    )
    return app


app = create_app()


def main() -> None:
    import uvicorn

    constants = load_constants()
    configure_logging(
        json_output=constants.logging.json_output,
        level=constants.logging.level,
    )
    uvicorn.run(
        create_app(constants),
        host=constants.server.host,
        port=constants.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
