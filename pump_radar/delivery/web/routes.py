import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from pump_radar.delivery.web.dependencies import get_pipeline
from pump_radar.research.pipeline import AnalysisPipeline, clean_ticker

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_BATCH = 20


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@router.get("/health")
async def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Stock analysis
# ---------------------------------------------------------------------------

@router.get("/api/stocks/{ticker}/analyze")
async def api_analyze(
    ticker: str,
    previous_mentions: int | None = Query(None, ge=0),
    previous_sentiment: float | None = Query(None, ge=-1.0, le=1.0),
    pipeline: AnalysisPipeline = Depends(get_pipeline),
):
    report = await pipeline.analyze(
        ticker,
        previous_mention_count=previous_mentions,
        previous_sentiment=previous_sentiment,
    )
    if not report.has_price:
        return JSONResponse(
            {"error": f"No price data for {report.ticker}"}, status_code=404
        )
    return report.to_dict()


@router.get("/api/stocks/{ticker}/sentiment")
async def api_sentiment(ticker: str, pipeline: AnalysisPipeline = Depends(get_pipeline)):
    symbol = clean_ticker(ticker)
    sentiment = await pipeline.sentiment(symbol)
    return {"ticker": symbol, **sentiment.model_dump(mode="json")}


@router.get("/api/stocks/{ticker}/price")
async def api_price(ticker: str, pipeline: AnalysisPipeline = Depends(get_pipeline)):
    symbol = clean_ticker(ticker)
    snapshot = await pipeline.price(symbol)
    if snapshot is None:
        return JSONResponse({"error": f"No price data for {symbol}"}, status_code=404)
    return snapshot.model_dump(mode="json")


@router.post("/api/stocks/batch-analyze")
async def api_batch_analyze(
    request: Request, pipeline: AnalysisPipeline = Depends(get_pipeline)
):
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "invalid JSON body"}, status_code=400)

    # Accept {"tickers": [...]} or a bare array
    tickers = body.get("tickers") if isinstance(body, dict) else body
    if not isinstance(tickers, list):
        return JSONResponse({"error": "tickers must be a list"}, status_code=400)

    tickers = [t for t in tickers if isinstance(t, str) and t.strip()]
    if not tickers:
        return JSONResponse({"error": "no tickers provided"}, status_code=400)
    if len(tickers) > MAX_BATCH:
        return JSONResponse(
            {"error": f"at most {MAX_BATCH} tickers per request"}, status_code=400
        )

    reports = await pipeline.batch(tickers)
    logger.info("Batch analysis: %d/%d tickers with price data", len(reports), len(tickers))
    return {
        "requested": len(tickers),
        "analyzed": len(reports),
        "results": [r.to_dict() for r in reports],
    }
