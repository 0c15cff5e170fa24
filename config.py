import os
from dotenv import load_dotenv
load_dotenv()

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")

database_config = {
    "MONGO_URI": MONGO_URI,
    "DB_NAME": os.getenv("MONGO_DB_NAME", "mlprojects"),
    "PROJECT_COLLECTION": "projects",
    "FIELD_COLLECTION": "fields",
    "TEXT_TRAINING_COLLECTION": "texttraining",
    "NUMBER_TRAINING_COLLECTION": "numbertraining",
    "IMAGE_TRAINING_COLLECTION": "imagetraining",
    "SOUND_TRAINING_COLLECTION": "soundtraining",
}

# Bulk calls against rate-limited external services are made one at a
# time, waiting a little longer after each one.
THROTTLE_CONFIG = {
    "INITIAL_DELAY_MS": int(os.getenv("THROTTLE_INITIAL_DELAY_MS", "5")),
    "INCREMENT_MS": int(os.getenv("THROTTLE_INCREMENT_MS", "50")),
    "MAX_DELAY_MS": int(os.getenv("THROTTLE_MAX_DELAY_MS", "5000")),
}

LOG_CONFIG = {
    "LEVEL": os.getenv("LOG_LEVEL", "DEBUG"),
    "TO_FILE": os.getenv("LOG_TO_FILE", "false"),
}

TRAINING_PAGE_SIZE = int(os.getenv("TRAINING_PAGE_SIZE", "50"))
