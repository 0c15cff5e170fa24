from typing import Any, Dict, List, Tuple

from projectstore.database.conn import mongo_client
from projectstore.utils.logger_utils import logger
from config import database_config


def _project_validator() -> Dict[str, Any]:
    return {
        "$jsonSchema": {
            "bsonType": "object",
            "required": [
                "userid",
                "classid",
                "type",
                "name",
                "language",
                "labels",
                "is_crowd_sourced",
                "numfields",
                "created_at",
            ],
            "properties": {
                "userid": {"bsonType": "string"},
                "classid": {"bsonType": "string"},
                "type": {"enum": ["text", "images", "numbers", "sounds"]},
                "name": {"bsonType": "string"},
                "language": {"bsonType": "string"},
                "labels": {"bsonType": "array", "items": {"bsonType": "string", "minLength": 1}},
                "is_crowd_sourced": {"bsonType": "bool"},
                "numfields": {"bsonType": "int", "minimum": 0},
                "created_at": {"bsonType": "date"},
            },
        }
    }


def _field_validator() -> Dict[str, Any]:
    return {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["userid", "classid", "projectid", "name", "type", "choices", "position"],
            "properties": {
                "userid": {"bsonType": "string"},
                "classid": {"bsonType": "string"},
                "projectid": {"bsonType": "string"},
                "name": {"bsonType": "string"},
                "type": {"enum": ["number", "multichoice"]},
                "choices": {"bsonType": "array", "items": {"bsonType": "string"}},
                "position": {"bsonType": "int", "minimum": 0},
            },
        }
    }


def _training_validator(payload_field: str, payload_type: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["projectid", "label", payload_field, "created_at"],
            "properties": {
                "projectid": {"bsonType": "string"},
                "label": {"bsonType": "string"},
                payload_field: payload_type,
                "created_at": {"bsonType": "date"},
            },
        }
    }


def _number_array() -> Dict[str, Any]:
    return {"bsonType": "array", "items": {"bsonType": ["double", "int", "long"]}}


def _validators() -> Dict[str, Dict[str, Any]]:
    return {
        database_config["PROJECT_COLLECTION"]: _project_validator(),
        database_config["FIELD_COLLECTION"]: _field_validator(),
        database_config["TEXT_TRAINING_COLLECTION"]: _training_validator("textdata", {"bsonType": "string"}),
        database_config["NUMBER_TRAINING_COLLECTION"]: _training_validator("numberdata", _number_array()),
        database_config["IMAGE_TRAINING_COLLECTION"]: _training_validator("imageurl", {"bsonType": "string"}),
        database_config["SOUND_TRAINING_COLLECTION"]: _training_validator("audiodata", _number_array()),
    }


# (collection key, index keys, unique, index name)
INDEXES: List[Tuple[str, List[Tuple[str, int]], bool, str]] = [
    ("PROJECT_COLLECTION", [("classid", 1), ("userid", 1), ("created_at", 1)], False, "idx_project_class_user"),
    ("PROJECT_COLLECTION", [("classid", 1), ("created_at", 1)], False, "idx_project_class"),
    ("FIELD_COLLECTION", [("projectid", 1), ("position", 1)], True, "uniq_field_position"),
    ("FIELD_COLLECTION", [("classid", 1), ("userid", 1)], False, "idx_field_class_user"),
    ("TEXT_TRAINING_COLLECTION", [("projectid", 1), ("textdata", 1)], True, "uniq_text_per_project"),
    ("IMAGE_TRAINING_COLLECTION", [("projectid", 1), ("imageurl", 1)], True, "uniq_image_per_project"),
]

TRAINING_COLLECTIONS = [
    "TEXT_TRAINING_COLLECTION",
    "NUMBER_TRAINING_COLLECTION",
    "IMAGE_TRAINING_COLLECTION",
    "SOUND_TRAINING_COLLECTION",
]

for _key in TRAINING_COLLECTIONS:
    INDEXES.append((_key, [("projectid", 1), ("label", 1)], False, "idx_training_project_label"))
    INDEXES.append((_key, [("projectid", 1), ("created_at", 1)], False, "idx_training_project_created"))


async def ensure_collections_and_indexes() -> None:
    """Create collections with validators and ensure indexes exist.

    This is idempotent and safe to call on every startup.
    """
    db = mongo_client.database

    existing = await db.list_collection_names()

    for name, validator in _validators().items():
        try:
            if name not in existing:
                await db.create_collection(name, validator=validator)
                logger.info(f"Created collection {name} with validator")
            else:
                try:
                    await db.command({
                        "collMod": name,
                        "validator": validator,
                        "validationLevel": "moderate",
                    })
                    logger.info(f"Updated validator for collection {name}")
                except Exception as e:
                    logger.warning(f"Could not update validator for {name}: {e}")
        except Exception as e:
            logger.warning(f"Could not create collection {name} with validator: {e}")

    for key, keys, unique, index_name in INDEXES:
        try:
            await db[database_config[key]].create_index(keys, unique=unique, name=index_name)
        except Exception as e:
            logger.warning(f"Create index {database_config[key]}.{index_name} failed or exists: {e}")
