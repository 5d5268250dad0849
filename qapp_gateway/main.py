import argparse
import logging
import sys
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import FastAPI

from qapp_gateway.api.middleware import setup_middlewares
from qapp_gateway.api.router import router
from qapp_gateway.config import Settings, parse_listen_addr, settings
from qapp_gateway.core.logging import setup_logging
from qapp_gateway.dependencies import build_control_plane_client, build_docker_client
from qapp_gateway.external.control_plane_client import ControlPlaneError

logger = logging.getLogger(__name__)


def login(app: FastAPI) -> None:
    """Authentifie qappctl une fois pour tout le processus"""
    try:
        app.state.control_plane.login()
    except ControlPlaneError as e:
        logger.critical(f"login failed, please check your access-key/secret-key pair: {e}")
        raise
    app.state.logged_in = True
    logger.info("Connecté à la plateforme")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not app.state.logged_in:
        login(app)
    logger.info(f"🚀 {app.title} démarrée")

    yield

    logger.info("Arrêt de la passerelle")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="API REST de pilotage des images, releases et déploiements via qappctl",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = app_settings
    app.state.control_plane = build_control_plane_client(app_settings)
    app.state.docker = build_docker_client(app_settings)
    app.state.logged_in = False

    setup_middlewares(app)
    app.include_router(router)
    return app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Passerelle REST pour qappctl")
    parser.add_argument("--access-key", default="", help="access key of Qiniu account")
    parser.add_argument("--secret-key", default="", help="secret key of Qiniu account")
    parser.add_argument("--listen-addr", default=None, help="HTTP listen address, i.e 0.0.0.0:9100")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    args = parser.parse_args(argv)

    if args.listen_addr is not None:
        try:
            parse_listen_addr(args.listen_addr)
        except ValueError as e:
            parser.error(f"--listen-addr: {e}")
    return args


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Les options de la ligne de commande priment sur l'environnement (ACCESS_KEY, SECRET_KEY, ...)"""
    overrides = {}
    if args.access_key:
        overrides["ACCESS_KEY"] = args.access_key
    if args.secret_key:
        overrides["SECRET_KEY"] = args.secret_key
    if args.listen_addr:
        overrides["LISTEN_ADDR"] = args.listen_addr
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    return Settings(**overrides)


def cli(argv: Optional[List[str]] = None) -> None:
    app_settings = settings_from_args(parse_args(argv))
    setup_logging(app_settings.LOG_LEVEL, log_file=app_settings.LOG_FILE, secrets=app_settings.secrets)

    gateway = create_app(app_settings)
    try:
        login(gateway)
    except ControlPlaneError:
        sys.exit(1)

    logger.info(f"Écoute sur {app_settings.listen_host}:{app_settings.listen_port}")
    uvicorn.run(gateway, host=app_settings.listen_host, port=app_settings.listen_port)


setup_logging(settings.LOG_LEVEL, log_file=settings.LOG_FILE, secrets=settings.secrets)
app = create_app()


if __name__ == "__main__":
    cli()
