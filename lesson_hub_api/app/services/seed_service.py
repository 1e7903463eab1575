"""
Sample data for development databases.

The helpers here are used by the ``seed_db.py`` script.  They insert
and index the sample lesson catalogue, summarise the catalogue with an
aggregation, prepare the indexes of the (initially empty) orders
collection and write placeholder lesson images that the static image
route can serve.
"""

import base64
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.db import DocumentStore


logger = logging.getLogger(__name__)


SAMPLE_LESSONS: List[Dict[str, Any]] = [
    {
        "topic": "Mathematics",
        "price": 25,
        "location": "London",
        "space": 10,
        "instructor": "Dr. Sarah Johnson",
        "duration": "1 hour",
        "level": "Intermediate",
        "description": "Comprehensive mathematics tutoring covering algebra, geometry, and calculus",
    },
    {
        "topic": "English Literature",
        "price": 30,
        "location": "Manchester",
        "space": 8,
        "instructor": "Prof. Michael Brown",
        "duration": "1.5 hours",
        "level": "Advanced",
        "description": "Deep dive into classic and contemporary English literature",
    },
    {
        "topic": "Physics",
        "price": 35,
        "location": "Birmingham",
        "space": 6,
        "instructor": "Dr. Emily Chen",
        "duration": "2 hours",
        "level": "Advanced",
        "description": "Advanced physics concepts including quantum mechanics and thermodynamics",
    },
    {
        "topic": "Chemistry",
        "price": 28,
        "location": "Liverpool",
        "space": 12,
        "instructor": "Dr. James Wilson",
        "duration": "1 hour",
        "level": "Beginner",
        "description": "Introduction to organic and inorganic chemistry fundamentals",
    },
    {
        "topic": "History",
        "price": 22,
        "location": "Leeds",
        "space": 15,
        "instructor": "Prof. Amanda Taylor",
        "duration": "1 hour",
        "level": "Intermediate",
        "description": "World history from ancient civilizations to modern times",
    },
    {
        "topic": "Biology",
        "price": 32,
        "location": "Edinburgh",
        "space": 9,
        "instructor": "Dr. Robert Garcia",
        "duration": "1.5 hours",
        "level": "Intermediate",
        "description": "Cell biology, genetics, and human anatomy exploration",
    },
    {
        "topic": "Art & Design",
        "price": 40,
        "location": "Glasgow",
        "space": 5,
        "instructor": "Ms. Lisa Martinez",
        "duration": "2 hours",
        "level": "Beginner",
        "description": "Creative art techniques including drawing, painting, and digital design",
    },
    {
        "topic": "Music Theory",
        "price": 45,
        "location": "Bristol",
        "space": 7,
        "instructor": "Mr. David Anderson",
        "duration": "1 hour",
        "level": "Intermediate",
        "description": "Music composition, harmony, and instrumental techniques",
    },
    {
        "topic": "Computer Science",
        "price": 50,
        "location": "Cambridge",
        "space": 4,
        "instructor": "Dr. Alex Thompson",
        "duration": "2 hours",
        "level": "Advanced",
        "description": "Programming fundamentals, algorithms, and data structures",
    },
    {
        "topic": "French Language",
        "price": 27,
        "location": "Oxford",
        "space": 11,
        "instructor": "Mme. Sophie Dubois",
        "duration": "1 hour",
        "level": "Beginner",
        "description": "French language basics including grammar, vocabulary, and conversation",
    },
]

# (key, direction) pairs indexed on the lessons collection.
LESSON_INDEXES = [
    ("topic", 1),
    ("location", 1),
    ("price", 1),
    ("space", 1),
    ("createdAt", -1),
]

# (key, direction) pairs indexed on the orders collection.
ORDER_INDEXES = [
    ("name", 1),
    ("phoneNumber", 1),
    ("lessonIDs", 1),
    ("numberOfSpaces", 1),
    ("orderDate", -1),
    ("status", 1),
]

SAMPLE_IMAGE_SUBJECTS = [
    ("mathematics", "#4285f4", "∑", "x²+y²=z²"),
    ("english", "#ea4335", "Aa", "Literature"),
    ("science", "#34a853", "⚗", "H₂O + NaCl"),
    ("history", "#fbbc04", "📜", "1066 AD"),
    ("geography", "#ff6d01", "🌍", "Latitude"),
]

# 1x1 pixel JPEG used to exercise a second content type.
_PLACEHOLDER_JPEG = base64.b64decode(
    "/9j/4AAQSkZJRgABAQEAYABgAAD/2wBDAAEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQE"
    "BAQEBAQEBAQEBAQEBAQEBAQH/2wBDAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQ"
    "EBAQEBAQEBAQEBAQEBAQH/wAARCAABAAEDASIAAhEBAxEB/8QAFQABAQAAAAAAAAAAAAAAAAAAAAv/xAAUEAEAAAAAAAAAA"
    "AAAAAAAAAAA/8QAFQEBAQAAAAAAAAAAAAAAAAAAAAX/xAAUEQEAAAAAAAAAAAAAAAAAAAAA/9oADAMBAAIRAxEAPwA/8A8A"
)


async def insert_sample_lessons(store: DocumentStore, replace: bool = False) -> int:
    """Insert the sample lessons and return how many were written.

    When the collection already holds lessons nothing is inserted,
    unless ``replace`` is set, in which case existing lessons are
    deleted first.
    """
    existing = await store.lessons.count_documents({})
    if existing and not replace:
        logger.info("Lessons collection already contains %s lesson(s); skipping", existing)
        return 0
    if existing:
        deleted = await store.lessons.delete_many({})
        logger.info("Removed %s existing lesson(s)", deleted.deleted_count)

    created_at = datetime.now(timezone.utc)
    documents = [dict(lesson, createdAt=created_at) for lesson in SAMPLE_LESSONS]
    result = await store.lessons.insert_many(documents)
    logger.info("Inserted %s sample lesson(s)", len(result.inserted_ids))
    return len(result.inserted_ids)


async def setup_lessons_indexes(store: DocumentStore) -> None:
    for key, direction in LESSON_INDEXES:
        await store.lessons.create_index([(key, direction)])
    logger.info("Created %s lesson index(es)", len(LESSON_INDEXES))


async def lesson_statistics(store: DocumentStore) -> Optional[Dict[str, Any]]:
    """Summarise the lesson catalogue.

    Returns a mapping with ``totalLessons``, ``averagePrice``,
    ``minPrice``, ``maxPrice`` and ``totalSpaces``, or ``None`` when
    the collection is empty.
    """
    pipeline = [
        {
            "$group": {
                "_id": None,
                "totalLessons": {"$sum": 1},
                "averagePrice": {"$avg": "$price"},
                "totalSpaces": {"$sum": "$space"},
                "minPrice": {"$min": "$price"},
                "maxPrice": {"$max": "$price"},
            }
        }
    ]
    cursor = await store.lessons.aggregate(pipeline)
    results = await cursor.to_list(length=None)
    if not results:
        return None
    stats = dict(results[0])
    stats.pop("_id", None)
    return stats


async def setup_orders_collection(store: DocumentStore) -> int:
    """Create the orders indexes and return the current number of orders."""
    for key, direction in ORDER_INDEXES:
        await store.orders.create_index([(key, direction)])
    count = await store.orders.count_documents({})
    logger.info("Orders collection ready with %s order(s)", count)
    return count


def _render_svg(name: str, color: str, icon: str, symbol: str) -> str:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg width="400" height="300" xmlns="http://www.w3.org/2000/svg">
    <defs>
        <linearGradient id="grad{name}" x1="0%" y1="0%" x2="100%" y2="100%">
            <stop offset="0%" style="stop-color:{color};stop-opacity:1" />
            <stop offset="100%" style="stop-color:{color}88;stop-opacity:1" />
        </linearGradient>
    </defs>
    <rect width="400" height="300" fill="url(#grad{name})" rx="15"/>
    <text x="200" y="120" font-family="Arial, sans-serif" font-size="60"
          text-anchor="middle" fill="white" opacity="0.9">{icon}</text>
    <text x="200" y="180" font-family="Arial, sans-serif" font-size="32"
          text-anchor="middle" fill="white" font-weight="bold">{name.upper()}</text>
    <text x="200" y="210" font-family="Arial, sans-serif" font-size="18"
          text-anchor="middle" fill="white" opacity="0.8">{symbol}</text>
    <text x="200" y="250" font-family="Arial, sans-serif" font-size="16"
          text-anchor="middle" fill="white" opacity="0.7">LESSON IMAGE</text>
</svg>
"""


def create_sample_images(images_dir: Path) -> List[Path]:
    """Write placeholder images into ``<images_dir>/lessons``."""
    lessons_dir = Path(images_dir) / "lessons"
    lessons_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for name, color, icon, symbol in SAMPLE_IMAGE_SUBJECTS:
        path = lessons_dir / f"{name}.svg"
        path.write_text(_render_svg(name, color, icon, symbol), encoding="utf-8")
        written.append(path)

    jpeg_path = lessons_dir / "test.jpg"
    jpeg_path.write_bytes(_PLACEHOLDER_JPEG)
    written.append(jpeg_path)

    logger.info("Created %s sample image(s) in %s", len(written), lessons_dir)
    return written
