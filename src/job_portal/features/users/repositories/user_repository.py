"""
User repository for database operations.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from asyncpg.exceptions import UniqueViolationError
from loguru import logger

from ....core.exceptions import ConflictError
from ....database import DatabaseManager, process_database_record, to_jsonb
from ....utils import utc_now
from ..entities.user import User

USER_COLUMNS = "id, name, email, phone, role, location, skills, created_at, updated_at"
UPDATABLE_FIELDS = ("name", "phone", "location", "skills")


class UserDatabaseRepository:
    """Repository for user data access."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def _to_entity(self, record) -> User:
        data = process_database_record(
            record,
            jsonb_fields=["skills"],
            datetime_fields=["created_at", "updated_at"],
        )
        return User(**data)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        record = await self.db.fetchrow(f"SELECT {USER_COLUMNS} FROM users WHERE id = $1", user_id)
        return self._to_entity(record) if record else None

    async def get_by_email(self, email: str) -> Optional[User]:
        record = await self.db.fetchrow(
            f"SELECT {USER_COLUMNS} FROM users WHERE email = $1", email.lower()
        )
        return self._to_entity(record) if record else None

    async def create(self, user: User) -> User:
        query = f"""
            INSERT INTO users (id, name, email, phone, role, location, skills, created_at, updated_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7::jsonb, $8, $9)
            RETURNING {USER_COLUMNS}
        """
        try:
            record = await self.db.fetchrow(
                query,
                user.id,
                user.name,
                user.email.lower(),
                user.phone,
                user.role.value,
                user.location,
                to_jsonb(user.skills),
                user.created_at,
                user.updated_at,
            )
        except UniqueViolationError:
            raise ConflictError("User already exists", details={"id": user.id})
        logger.info(f"Created user {user.id}")
        return self._to_entity(record)

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        set_clauses = []
        params = [user_id]
        for field_name in UPDATABLE_FIELDS:
            if field_name not in changes:
                continue
            params.append(to_jsonb(changes[field_name]) if field_name == "skills" else changes[field_name])
            cast = "::jsonb" if field_name == "skills" else ""
            set_clauses.append(f"{field_name} = ${len(params)}{cast}")

        params.append(utc_now())
        set_clauses.append(f"updated_at = ${len(params)}")

        query = f"""
            UPDATE users SET {", ".join(set_clauses)}
            WHERE id = $1
            RETURNING {USER_COLUMNS}
        """
        record = await self.db.fetchrow(query, *params)
        return self._to_entity(record) if record else None

    async def count(self) -> int:
        return await self.db.fetchval("SELECT COUNT(*) FROM users")

    async def count_created_since(self, since: datetime) -> int:
        return await self.db.fetchval("SELECT COUNT(*) FROM users WHERE created_at >= $1", since)
