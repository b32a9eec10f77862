import uvicorn
from aws_lambda_powertools import Logger
from mangum import Mangum

from posts_api.http_handler import create_app, metrics
from posts_api.settings import load_settings

logger = Logger(utc=True)

settings = load_settings()
app = create_app(settings)

handler = Mangum(app)
handler.__name__ = "handler"
handler = logger.inject_lambda_context(handler, clear_state=True, log_event=True)
handler = metrics.log_metrics(handler, capture_cold_start_metric=True)


def run():
    logger.info(f"Starting server at http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
