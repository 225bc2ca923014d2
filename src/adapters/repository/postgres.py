"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Consistency Model:
-----------------
Operations are plain read-modify-write: find_by_email() loads a row,
the domain mutates the account, save() writes every mutable column
back. No row lock or version column spans those steps, so concurrent
writers to the same account race and the last UPDATE wins.

Uniqueness is enforced by the UNIQUE constraint on users.email;
create() maps the resulting UniqueViolation to the domain's
DuplicateKey error.

The users_challenge_pair CHECK constraint guarantees that
verification_code and verification_code_expires_at are written
together.
"""

import logging
from pathlib import Path

from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.account import UserAccount
from src.domain.exceptions import DuplicateKey

logger = logging.getLogger(__name__)

_COLUMNS = """
    id, email, password_hash, is_verified,
    verification_code, verification_code_expires_at,
    created_at, updated_at
"""


def _row_to_account(row: tuple) -> UserAccount:
    return UserAccount(
        id=str(row[0]),
        email=row[1],
        password_hash=row[2],
        is_verified=row[3],
        verification_code=row[4],
        verification_code_expires_at=row[5],
        created_at=row[6],
        updated_at=row[7],
    )


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> UserAccount | None:
        """
        Load an account by normalized email.

        Args:
            email: Normalized email address (lowercase, stripped)

        Returns:
            UserAccount, or None if no row exists
        """
        sql = f"SELECT {_COLUMNS} FROM users WHERE email = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()

        return _row_to_account(row) if row is not None else None

    def create(self, email: str) -> UserAccount:
        """
        Insert a new unverified, password-less account.

        Args:
            email: Normalized email address

        Returns:
            The inserted account with its generated UUID

        Raises:
            DuplicateKey: If the email is already stored
        """
        sql = f"""
            INSERT INTO users (email, is_verified, created_at, updated_at)
            VALUES (%s, FALSE, NOW(), NOW())
            RETURNING {_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation:
            raise DuplicateKey(email) from None

        return _row_to_account(row)

    def save(self, account: UserAccount) -> None:
        """
        Write all mutable fields of an account back to its row.

        Args:
            account: Account previously loaded or created by this repository
        """
        sql = """
            UPDATE users
            SET password_hash = %s,
                is_verified = %s,
                verification_code = %s,
                verification_code_expires_at = %s,
                updated_at = NOW()
            WHERE id = %s
            RETURNING updated_at
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    account.password_hash,
                    account.is_verified,
                    account.verification_code,
                    account.verification_code_expires_at,
                    account.id,
                ),
            )
            row = cursor.fetchone()
            conn.commit()

        if row is not None:
            account.updated_at = row[0]


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
