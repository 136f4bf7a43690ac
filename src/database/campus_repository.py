"""
Campus Repository - Read-only lookups over the campus fact tables.

All matching is case-insensitive substring matching (icontains).
autoescape makes % and _ in user text match literally.
Rows are returned as API-shaped dicts ready for the LLM data block.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, or_

from src.core.logging_config import get_logger
from src.database.connection import DatabaseConnection, get_database
from src.database.models import Staff, Fee, Room, Knowledge, STAFF_ACTIVE

logger = get_logger(__name__)

STAFF_LIMIT = 5
FEE_LIMIT = 10
KNOWLEDGE_LIMIT = 5


class CampusRepository:
    """
    Query staff, fees, rooms and knowledge snippets.

    Example:
        >>> repo = CampusRepository()
        >>> repo.get_fee_info("B.Tech")
        [{'programName': 'B.Tech Computer Science', ...}]
    """

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    def get_staff_info(self, query: str) -> List[Dict[str, Any]]:
        """
        Find active staff where every word of the query matches
        the name, department or designation.

        Args:
            query: Free-text user message

        Returns:
            Up to 5 staff dicts
        """
        terms = query.lower().split()
        if not terms:
            return []

        term_filters = [
            or_(
                Staff.name.icontains(term, autoescape=True),
                Staff.department.icontains(term, autoescape=True),
                Staff.designation.icontains(term, autoescape=True),
            )
            for term in terms
        ]

        with self.db.get_session() as session:
            rows = (
                session.query(Staff)
                .filter(and_(*term_filters), Staff.status == STAFF_ACTIVE)
                .order_by(Staff.id)
                .limit(STAFF_LIMIT)
                .all()
            )
            result = [row.to_dict() for row in rows]

        logger.debug(f"Staff lookup: terms={len(terms)}, hits={len(result)}")
        return result

    def get_fee_info(self, query: str) -> List[Dict[str, Any]]:
        """
        Find fee rows whose program, academic year or category
        contains the whole query.

        Returns:
            Up to 10 fee dicts
        """
        term = query.strip()

        with self.db.get_session() as session:
            rows = (
                session.query(Fee)
                .filter(or_(
                    Fee.program_name.icontains(term, autoescape=True),
                    Fee.academic_year.icontains(term, autoescape=True),
                    Fee.category.icontains(term, autoescape=True),
                ))
                .order_by(Fee.id)
                .limit(FEE_LIMIT)
                .all()
            )
            result = [row.to_dict() for row in rows]

        logger.debug(f"Fee lookup: hits={len(result)}")
        return result

    def get_room_directions(self, query: str) -> Optional[Dict[str, Any]]:
        """
        Find a room by code first, then by building name or floor.

        Returns:
            The first matching room dict, or None
        """
        term = query.strip()

        with self.db.get_session() as session:
            room = (
                session.query(Room)
                .filter(Room.room_code.icontains(term, autoescape=True))
                .order_by(Room.id)
                .first()
            )

            if room is None:
                room = (
                    session.query(Room)
                    .filter(or_(
                        Room.building_name.icontains(term, autoescape=True),
                        Room.floor.icontains(term, autoescape=True),
                    ))
                    .order_by(Room.id)
                    .first()
                )

            result = room.to_dict() if room else None

        logger.debug(f"Room lookup: found={result is not None}")
        return result

    def search_knowledge(self, query: str, limit: int = KNOWLEDGE_LIMIT) -> List[Dict[str, Any]]:
        """
        Search knowledge snippets by text or name.

        Args:
            query: Free-text user message
            limit: Maximum snippets to return

        Returns:
            Knowledge dicts; empty for a blank query
        """
        if not query or not query.strip():
            return []

        term = query.strip()

        with self.db.get_session() as session:
            rows = (
                session.query(Knowledge)
                .filter(or_(
                    Knowledge.text.icontains(term, autoescape=True),
                    Knowledge.name.icontains(term, autoescape=True),
                ))
                .order_by(Knowledge.id)
                .limit(limit)
                .all()
            )
            result = [row.to_dict() for row in rows]

        logger.debug(f"Knowledge search: hits={len(result)}")
        return result
