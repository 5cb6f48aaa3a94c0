"""Tests for the SQLite expense store."""
import unittest
import sqlite3
import tempfile
import shutil
from datetime import date
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

from spendtrack.filters import DateRange
from spendtrack.storage import ExpenseStore
from spendtrack.storage.models import AMOUNT_MESSAGE, CATEGORY_MESSAGE, DATE_MESSAGE
from spendtrack.utils.exceptions import ValidationError


class TestExpenseStore(unittest.TestCase):
    """Test ExpenseStore functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.store = ExpenseStore(self.test_dir / "expenses.db")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_add_and_get(self):
        """Test adding an expense and reading it back."""
        expense_id = self.store.add_expense("12.50", " Food ", " lunch ", "2024-03-10")

        record = self.store.get_expense(expense_id)
        self.assertEqual(record.id, expense_id)
        self.assertEqual(record.amount, Decimal("12.5"))
        self.assertEqual(record.category, "Food")
        self.assertEqual(record.note, "lunch")
        self.assertEqual(record.date, "2024-03-10")

    def test_add_defaults(self):
        """Test that a blank note is dropped and the date defaults to today."""
        expense_id = self.store.add_expense(3, "Coffee", "   ")

        record = self.store.get_expense(expense_id)
        self.assertIsNone(record.note)
        self.assertEqual(len(record.date), 10)

    def test_list_newest_first(self):
        """Test id-descending order."""
        first = self.store.add_expense(1, "A", date="2024-03-01")
        second = self.store.add_expense(2, "B", date="2024-02-01")

        ids = [record.id for record in self.store.list_expenses()]
        self.assertEqual(ids, [second, first])

    def test_list_with_range_is_inclusive(self):
        """Test BETWEEN filtering on both boundaries."""
        self.store.add_expense(1, "Before", date="2024-03-09")
        self.store.add_expense(2, "Start", date="2024-03-10")
        self.store.add_expense(3, "End", date="2024-03-16")
        self.store.add_expense(4, "After", date="2024-03-17")

        records = self.store.list_expenses(DateRange(date(2024, 3, 10), date(2024, 3, 16)))

        self.assertEqual([record.category for record in records], ["End", "Start"])

    def test_update(self):
        """Test editing an expense."""
        expense_id = self.store.add_expense(5, "Books", date="2024-03-01")

        self.assertTrue(self.store.update_expense(expense_id, "7.25", "Textbooks", None, "2024-03-02"))

        record = self.store.get_expense(expense_id)
        self.assertEqual(record.amount, Decimal("7.25"))
        self.assertEqual(record.category, "Textbooks")
        self.assertEqual(record.date, "2024-03-02")

    def test_update_missing(self):
        """Test updating an unknown id."""
        self.assertFalse(self.store.update_expense(999, 1, "X"))

    def test_delete(self):
        """Test deleting an expense."""
        expense_id = self.store.add_expense(5, "Books")

        self.assertTrue(self.store.delete_expense(expense_id))
        self.assertIsNone(self.store.get_expense(expense_id))
        self.assertFalse(self.store.delete_expense(expense_id))

    def test_invalid_amount_rejected(self):
        """Test amount validation on entry."""
        for amount in ("abc", 0, -5, ""):
            with self.assertRaises(ValidationError) as ctx:
                self.store.add_expense(amount, "Food")
            self.assertEqual(str(ctx.exception), AMOUNT_MESSAGE)

        self.assertEqual(self.store.list_expenses(), [])

    def test_blank_category_rejected(self):
        """Test category validation on entry."""
        for category in ("", "   ", None):
            with self.assertRaises(ValidationError) as ctx:
                self.store.add_expense(10, category)
            self.assertEqual(str(ctx.exception), CATEGORY_MESSAGE)

    def test_bad_date_rejected(self):
        """Test date validation on entry."""
        for value in ("2024-3-5", "yesterday", "2024-02-30"):
            with self.assertRaises(ValidationError) as ctx:
                self.store.add_expense(10, "Food", date=value)
            self.assertEqual(str(ctx.exception), DATE_MESSAGE)

    def test_legacy_table_gets_date_column(self):
        """Test upgrading a table created before the date column existed."""
        legacy_path = self.test_dir / "legacy.db"
        with sqlite3.connect(legacy_path) as conn:
            conn.execute(
                "CREATE TABLE expenses (id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "amount REAL NOT NULL, category TEXT NOT NULL, note TEXT)"
            )
            conn.execute("INSERT INTO expenses (amount, category, note) VALUES (9.5, 'Food', NULL)")
        conn.close()

        store = ExpenseStore(legacy_path, today=date(2024, 3, 5))

        records = store.list_expenses()
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].date, "2024-03-05")
        self.assertEqual(records[0].amount, Decimal("9.5"))

    def test_failed_migration_still_opens(self):
        """Test that a failed date-column migration is logged and bootstrap continues."""
        legacy_path = self.test_dir / "locked.db"
        with sqlite3.connect(legacy_path) as conn:
            conn.execute(
                "CREATE TABLE expenses (id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "amount REAL NOT NULL, category TEXT NOT NULL, note TEXT)"
            )
        conn.close()

        failure = sqlite3.OperationalError("database is locked")
        with patch.object(ExpenseStore, "_add_date_column", side_effect=failure), \
                self.assertLogs("spendtrack", level="WARNING") as logs:
            store = ExpenseStore(legacy_path)

        self.assertEqual(store.db_path, legacy_path)
        self.assertTrue(any("Could not add date column" in line for line in logs.output))
        self.assertTrue(any("skipping date backfill" in line for line in logs.output))

    def test_reopen_keeps_data(self):
        """Test that schema bootstrap is idempotent."""
        self.store.add_expense(1, "A", date="2024-03-01")

        reopened = ExpenseStore(self.test_dir / "expenses.db", today=date(2030, 1, 1))

        self.assertEqual(reopened.list_expenses()[0].date, "2024-03-01")


if __name__ == "__main__":
    unittest.main()
