from fastapi import APIRouter, FastAPI
import importlib, pkgutil, logging

logger = logging.getLogger(__name__)

# 이 패키지(root)
PACKAGE_NAME = __name__


def include_all_routers(app: FastAPI) -> None:
    """
    app/api 패키지의 모든 모듈을 스캔해서 ROUTERS 리스트(또는 top-level APIRouter)를 include.
    같은 router 객체는 한 번만 등록한다.
    """
    package = importlib.import_module(PACKAGE_NAME)
    seen = set()

    for modinfo in pkgutil.iter_modules(package.__path__):
        # _ 로 시작하는 내부 모듈은 무시
        if modinfo.name.startswith("_"):
            continue

        module = importlib.import_module(f"{PACKAGE_NAME}.{modinfo.name}")
        routers = getattr(module, "ROUTERS", None)
        if not isinstance(routers, (list, tuple)):
            routers = [obj for obj in vars(module).values() if isinstance(obj, APIRouter)]

        for r in routers:
            if isinstance(r, APIRouter) and id(r) not in seen:
                seen.add(id(r))
                app.include_router(r)
                logger.debug(f"router included: {modinfo.name} ({r.prefix or '/'})")
