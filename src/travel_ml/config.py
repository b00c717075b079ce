"""Service configuration. Deployment settings come from environment variables."""

import os

# Document store layout
PENDING_COLLECTION = os.environ.get('TRAVEL_ML_PENDING_COLLECTION', 'pending_training_places')
MODELS_COLLECTION = os.environ.get('TRAVEL_ML_MODELS_COLLECTION', 'ml_models')
MODEL_ID = os.environ.get('TRAVEL_ML_MODEL_ID', 'travel_recommendation')
APP_CONFIG_COLLECTION = os.environ.get('TRAVEL_ML_APP_CONFIG_COLLECTION', 'app_config')
RELOAD_DOC_ID = os.environ.get('TRAVEL_ML_RELOAD_DOC_ID', 'ml_model')

STORE_PATH = os.environ.get('TRAVEL_ML_STORE_PATH', './data/store.json')

# Retraining
AUTO_RETRAIN_THRESHOLD = 1
NEEDS_RETRAINING_THRESHOLD = 10
TRAINING_DELAY_SECONDS = float(os.environ.get('TRAVEL_ML_TRAINING_DELAY_SECONDS', '2.0'))

# Model download (placeholder until signed URLs exist)
DOWNLOAD_URL = os.environ.get(
    'TRAVEL_ML_DOWNLOAD_URL',
    'https://your-storage-bucket.googleapis.com/ml_models/travel_model.tflite',
)
MODEL_SIZE_BYTES = int(os.environ.get('TRAVEL_ML_MODEL_SIZE_BYTES', str(1024 * 1024)))

# Scheduled auto-verification
VERIFICATION_SCHEDULE = '0 2 * * *'
VERIFICATION_TIMEZONE = 'Asia/Colombo'
AUTO_VERIFY_BATCH_LIMIT = 5
AUTO_VERIFY_MIN_AGE_MS = 24 * 60 * 60 * 1000
AUTO_VERIFY_MIN_COST = 10
AUTO_VERIFY_MIN_CAPTION_LENGTH = 20
SYSTEM_VERIFIER = 'system'

# HTTP service
HOST = os.environ.get('TRAVEL_ML_HOST', '0.0.0.0')
PORT = int(os.environ.get('TRAVEL_ML_PORT', '5001'))
CALLER_HEADER = os.environ.get('TRAVEL_ML_CALLER_HEADER', 'X-Caller-Uid')
