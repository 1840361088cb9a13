import logging
import uuid

from wedding_api.services.kv_store import KVStore, SUGGESTIONS_KEY, write_json_list

logger = logging.getLogger(__name__)


DEFAULT_SUGGESTIONS = [
    {
        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "suggestion-3-hours-before")),
        "title": "If You Have 3 Hours Before",
        "icon": "⏰",
        "items": [
            "Visit Magic Kingdom (20 min away)",
            "Explore the Grand Floridian grounds",
            "Relax at the resort spa",
            "Have lunch at Gasparilla Island Grill",
        ],
    },
    {
        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "suggestion-coffee-breakfast")),
        "title": "Best Coffee & Breakfast",
        "icon": "☕",
        "items": [
            "Gasparilla Island Grill (on-site)",
            "Kona Cafe at Polynesian Resort",
            "Starbucks at Magic Kingdom",
            "Garden View Tea Room (afternoon tea)",
        ],
    },
    {
        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "suggestion-family-friendly")),
        "title": "Family-Friendly Activities",
        "icon": "\U0001f468\u200d\U0001f469\u200d\U0001f467\u200d\U0001f466",
        "items": [
            "Character meet & greets at resort",
            "Resort monorail tour",
            "Pool time at Grand Floridian",
            "Explore Disney Springs (free entry)",
        ],
    },
    {
        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "suggestion-rain-plan")),
        "title": "Rain Plan Ideas",
        "icon": "\U0001f327\ufe0f",
        "items": [
            "Indoor photos at resort lobby",
            "Visit Disney Springs shopping",
            "Enjoy resort amenities",
            "Umbrellas provided at ceremony",
        ],
    },
]


async def seed_suggestions(kv: KVStore) -> bool:
    """Store the default categories unless a suggestions document exists."""
    if await kv.get(SUGGESTIONS_KEY) is not None:
        return False

    await write_json_list(kv, SUGGESTIONS_KEY, DEFAULT_SUGGESTIONS)
    logger.info("Seeded %d default suggestion categories", len(DEFAULT_SUGGESTIONS))
    return True
