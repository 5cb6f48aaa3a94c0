"""SQLite-backed expense store."""
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from .models import ExpenseInput, ExpenseRecord
from spendtrack.filters.models import DateRange
from spendtrack.filters.resolver import format_date_iso
from spendtrack.utils.exceptions import StorageError
from spendtrack.utils.logger import get_logger

logger = get_logger()


class ExpenseStore:
    """Reads and writes expenses in a local SQLite database."""

    def __init__(self, db_path: Path, today: Optional[date] = None):
        """
        Open (and if needed create or upgrade) the expense database.

        Args:
            db_path: Path to the SQLite file
            today: Date used to backfill rows that predate the date column
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db(today or datetime.now().date())

    @contextmanager
    def _connection(self):
        conn = None
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise StorageError(f"Expense database error ({self.db_path}): {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def _init_db(self, today: date):
        with self._connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS expenses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    amount REAL NOT NULL,
                    category TEXT NOT NULL,
                    note TEXT
                )
            """)

            if not self._has_date_column(conn):
                try:
                    self._add_date_column(conn)
                    logger.info("Added date column to expenses table")
                except sqlite3.OperationalError as e:
                    logger.warning(f"Could not add date column (maybe already exists): {e}")

            if not self._has_date_column(conn):
                logger.warning("Expenses table has no date column; skipping date backfill")
                return

            cursor = conn.execute(
                "UPDATE expenses SET date = ? WHERE date IS NULL OR date = ''",
                (format_date_iso(today),)
            )
            if cursor.rowcount > 0:
                logger.info(f"Backfilled {cursor.rowcount} undated expenses with {today}")

    @staticmethod
    def _has_date_column(conn: sqlite3.Connection) -> bool:
        return any(row["name"] == "date" for row in conn.execute("PRAGMA table_info(expenses)"))

    @staticmethod
    def _add_date_column(conn: sqlite3.Connection) -> None:
        conn.execute("ALTER TABLE expenses ADD COLUMN date TEXT")

    def add_expense(self, amount, category, note=None, date=None) -> int:
        """Insert an expense and return its generated id."""
        entry = ExpenseInput.build(amount=amount, category=category, note=note, date=date)

        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO expenses (amount, category, note, date) VALUES (?, ?, ?, ?)",
                (float(entry.amount), entry.category, entry.note, entry.date)
            )
            expense_id = cursor.lastrowid

        logger.info(f"Added expense #{expense_id}: {entry.amount} in {entry.category} on {entry.date}")
        return expense_id

    def update_expense(self, expense_id: int, amount, category, note=None, date=None) -> bool:
        """Overwrite an expense. Returns False when no row has that id."""
        entry = ExpenseInput.build(amount=amount, category=category, note=note, date=date)

        with self._connection() as conn:
            cursor = conn.execute(
                "UPDATE expenses SET amount = ?, category = ?, note = ?, date = ? WHERE id = ?",
                (float(entry.amount), entry.category, entry.note, entry.date, expense_id)
            )
            updated = cursor.rowcount > 0

        if updated:
            logger.info(f"Updated expense #{expense_id}")
        else:
            logger.warning(f"No expense #{expense_id} to update")
        return updated

    def delete_expense(self, expense_id: int) -> bool:
        """Delete an expense. Returns False when no row has that id."""
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted expense #{expense_id}")
        return deleted

    def get_expense(self, expense_id: int) -> Optional[ExpenseRecord]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT id, amount, category, note, date FROM expenses WHERE id = ?",
                (expense_id,)
            ).fetchone()
        return self._row_to_record(row) if row else None

    def list_expenses(self, date_range: Optional[DateRange] = None) -> List[ExpenseRecord]:
        """
        List expenses, newest first.

        Args:
            date_range: Inclusive calendar-date range, or None for every expense

        Returns:
            List of ExpenseRecord objects
        """
        sql = "SELECT id, amount, category, note, date FROM expenses"
        params = ()
        if date_range is not None:
            sql += " WHERE date BETWEEN ? AND ?"
            params = date_range.as_params()
        sql += " ORDER BY id DESC"

        with self._connection() as conn:
            rows = conn.execute(sql, params).fetchall()

        logger.debug(f"Loaded {len(rows)} expenses (range: {date_range})")
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> ExpenseRecord:
        amount = row["amount"]
        # REAL comes back as float; anything else is left for the aggregator to coerce
        if isinstance(amount, float):
            amount = Decimal(repr(amount))
        elif isinstance(amount, int):
            amount = Decimal(amount)

        return ExpenseRecord(
            id=row["id"],
            amount=amount,
            category=row["category"],
            note=row["note"],
            date=row["date"]
        )
