from fastapi import FastAPI

from pump_radar.delivery.web.routes import router
from pump_radar.research.pipeline import AnalysisPipeline, default_pipeline


def create_app(pipeline: AnalysisPipeline | None = None) -> FastAPI:
    app = FastAPI(title="Pump Radar", version="0.1.0")
    app.state.pipeline = pipeline or default_pipeline()
    app.include_router(router)
    return app
