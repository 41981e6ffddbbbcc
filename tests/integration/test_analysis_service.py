from datetime import datetime, timezone

import psycopg
import pytest

from hair_advisor.core.database.analysis_service import TABLE, AnalysisService
from hair_advisor.core.exceptions import DatabaseOperationError


def _row(analysis_id=1, user_id="user-1", text="Global Hair State Score: 70%"):
    return {
        'id': analysis_id,
        'user_id': user_id,
        'analysis_text': text,
        'image_references': {'up': 'https://cdn.example.com/up.jpg'},
        'created_at': datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
    }


def test_save_analysis(fake_db_factory):
    cursor, manager = fake_db_factory(fetchone_result={'id': 42})
    service = AnalysisService(manager)

    analysis_id = service.save_analysis("user-1", "report text", {'up': 'https://cdn.example.com/up.jpg'})

    assert analysis_id == 42
    query, params = cursor.executed[0]
    assert f"INSERT INTO {TABLE}" in query
    assert "RETURNING id" in query
    assert params[0] == "user-1"
    assert params[1] == "report text"
    assert params[2].obj == {'up': 'https://cdn.example.com/up.jpg'}
    assert params[3].tzinfo is not None


def test_save_analysis_requires_user(fake_db_factory):
    cursor, manager = fake_db_factory()

    with pytest.raises(ValueError):
        AnalysisService(manager).save_analysis("", "report text")
    assert cursor.executed == []


def test_save_analysis_database_error(fake_db_factory):
    _, manager = fake_db_factory(error=psycopg.OperationalError("server closed the connection"))

    with pytest.raises(DatabaseOperationError) as exc_info:
        AnalysisService(manager).save_analysis("user-1", "report text")

    assert exc_info.value.context['operation'] == 'insert'
    assert exc_info.value.context['table'] == TABLE
    assert "server closed the connection" in exc_info.value.context['original_error']


def test_get_user_analyses(fake_db_factory):
    cursor, manager = fake_db_factory(fetchall_result=[_row(2), _row(1)])

    records = AnalysisService(manager).get_user_analyses("user-1", days=7, limit=10)

    assert [record.id for record in records] == [2, 1]
    assert records[0].raw_text == "Global Hair State Score: 70%"
    assert records[0].parse().health_score == 70
    query, params = cursor.executed[0]
    assert "ORDER BY created_at DESC" in query
    assert params[0] == "user-1"
    assert params[2] == 10
    assert (datetime.now(timezone.utc) - params[1]).days == 7


def test_get_latest_analysis(fake_db_factory):
    _, manager = fake_db_factory(fetchone_result=_row(5))

    record = AnalysisService(manager).get_latest_analysis("user-1")

    assert record.id == 5
    assert record.created_at == datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def test_get_analysis_missing(fake_db_factory):
    cursor, manager = fake_db_factory(fetchone_result=None)

    assert AnalysisService(manager).get_analysis(99) is None
    assert cursor.executed[0][1] == (99,)


def test_get_analysis_database_error(fake_db_factory):
    _, manager = fake_db_factory(error=psycopg.errors.UndefinedTable("relation does not exist"))

    with pytest.raises(DatabaseOperationError) as exc_info:
        AnalysisService(manager).get_analysis(1)

    assert exc_info.value.context['operation'] == 'select'


@pytest.mark.parametrize("rowcount,expected", [(1, True), (0, False)])
def test_delete_analysis(fake_db_factory, rowcount, expected):
    cursor, manager = fake_db_factory(rowcount=rowcount)

    assert AnalysisService(manager).delete_analysis(3) is expected
    assert cursor.executed[0] == (f"DELETE FROM {TABLE} WHERE id = %s", (3,))
