import os
import tempfile
import threading
import unittest

from swift_registry.errors import ConflictError, NotFoundError
from swift_registry.store import CodeRecord, InMemoryCodeStore, create_store


def _rec(code, iso2="US", is_hq=None, name="Test Bank", country="UNITED STATES"):
    return CodeRecord(
        code=code,
        bank_name=name,
        address="1 Main St",
        country_iso2=iso2,
        country_name=country,
        is_headquarter=code.endswith("XXX") if is_hq is None else is_hq,
    )


class StoreContract:
    """Behaviour shared by every CodeStore backend."""

    def make_store(self):
        raise NotImplementedError

    def setUp(self):
        self.store = self.make_store()

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.store.get("NOPEUSNYXXX"))

    def test_insert_then_get(self):
        rec = _rec("BANKUSNYXXX")
        self.assertEqual(self.store.insert(rec), rec)
        self.assertEqual(self.store.get("BANKUSNYXXX"), rec)

    def test_get_is_case_sensitive(self):
        self.store.insert(_rec("BANKUSNYXXX"))
        self.assertIsNone(self.store.get("bankusnyxxx"))

    def test_insert_duplicate_conflicts(self):
        self.store.insert(_rec("BANKUSNYXXX"))
        with self.assertRaises(ConflictError):
            self.store.insert(_rec("BANKUSNYXXX", name="Other Name"))
        self.assertEqual(self.store.get("BANKUSNYXXX").bank_name, "Test Bank")

    def test_list_by_country_sorted(self):
        for code in ("ZEBRUS33XXX", "BANKUSNY123", "BANKUSNYXXX"):
            self.store.insert(_rec(code))
        self.store.insert(_rec("BANKGB2LXXX", iso2="GB", country="UNITED KINGDOM"))
        codes = [r.code for r in self.store.list_by_country("US")]
        self.assertEqual(codes, ["BANKUSNY123", "BANKUSNYXXX", "ZEBRUS33XXX"])
        self.assertEqual(self.store.list_by_country("PL"), [])

    def test_list_by_group_excluding(self):
        for code in ("BANKUSNYXXX", "BANKUSNY456", "BANKUSNY123", "BANKUSNZXXX"):
            self.store.insert(_rec(code))
        codes = [r.code for r in self.store.list_by_group_excluding("BANKUSNY", "BANKUSNYXXX")]
        self.assertEqual(codes, ["BANKUSNY123", "BANKUSNY456"])

    def test_delete_returns_record_then_not_found(self):
        rec = _rec("BANKUSNYXXX")
        self.store.insert(rec)
        self.assertEqual(self.store.delete("BANKUSNYXXX"), rec)
        self.assertIsNone(self.store.get("BANKUSNYXXX"))
        with self.assertRaises(NotFoundError):
            self.store.delete("BANKUSNYXXX")

    def test_delete_headquarter_keeps_branches(self):
        self.store.insert(_rec("BANKUSNYXXX"))
        self.store.insert(_rec("BANKUSNY123"))
        self.store.delete("BANKUSNYXXX")
        self.assertIsNotNone(self.store.get("BANKUSNY123"))

    def test_upsert_inserts_and_replaces(self):
        self.store.upsert(_rec("BANKUSNYXXX"))
        self.store.upsert(_rec("BANKUSNYXXX", name="Renamed"))
        self.assertEqual(self.store.get("BANKUSNYXXX").bank_name, "Renamed")
        self.assertEqual(self.store.count(), 1)

    def test_concurrent_inserts_single_winner(self):
        results = []
        lock = threading.Lock()

        def worker(i):
            try:
                self.store.insert(_rec("RACEUSNYXXX", name=f"Bank {i}"))
                outcome = "ok"
            except ConflictError:
                outcome = "conflict"
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(results.count("ok"), 1)
        self.assertEqual(results.count("conflict"), 7)


class TestInMemoryCodeStore(StoreContract, unittest.TestCase):
    def make_store(self):
        return InMemoryCodeStore()


class TestSqlCodeStore(StoreContract, unittest.TestCase):
    def make_store(self):
        self._tmp = tempfile.TemporaryDirectory()
        return create_store(f"sqlite:///{os.path.join(self._tmp.name, 'codes.db')}")

    def tearDown(self):
        self.store.close()
        self._tmp.cleanup()

    def test_group_key_column_written_from_code(self):
        from sqlalchemy import select
        from swift_registry.store.sql import swift_codes

        self.store.insert(_rec("BANKUSNY123"))
        with self.store._engine.connect() as conn:
            key = conn.execute(select(swift_codes.c.headquarter_group_key)).scalar_one()
        self.assertEqual(key, "BANKUSNY")


if __name__ == "__main__":
    unittest.main()
