from fastapi import Request

from pump_radar.research.pipeline import AnalysisPipeline


def get_pipeline(request: Request) -> AnalysisPipeline:
    return request.app.state.pipeline
