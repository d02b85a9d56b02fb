import os

from climate_survey import create_app

app = create_app()

# worker: celery -A survey_backend.celery worker --loglevel=info
celery = app.extensions["celery"]

if __name__ == "__main__":
    port = int(os.getenv("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=app.config.get("DEBUG", False))
