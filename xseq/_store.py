"""
xseq/_store.py — zapis i odczyt migawek stanu zadań w PostgreSQL.

Tabela task_state (xseq/schema.sql) trzyma jedną autorytatywną kopię flag
done dla każdej procedury (procedure_key). Upsert łączy flagi przez OR,
więc zapis nigdy nie cofa zadania do stanu niewykonanego, nawet gdy dwóch
uczestników zapisuje równocześnie.

Wiersze innej wersji dokumentu (inny fingerprint) są usuwane wyłącznie
na jawne żądanie (reset=True, w CLI: --reset).
"""

from __future__ import annotations

import psycopg2.extras

from sequencer import Snapshot, TaskState

_FINGERPRINTS_SQL = """
    SELECT DISTINCT fingerprint
    FROM task_state
    WHERE procedure_key = %s
    ORDER BY fingerprint
"""

_SELECT_SQL = """
    SELECT task_id, done
    FROM task_state
    WHERE procedure_key = %s AND fingerprint = %s
    ORDER BY task_id
"""

_DELETE_STALE_SQL = """
    DELETE FROM task_state
    WHERE procedure_key = %s AND fingerprint <> %s
"""

_UPSERT_SQL = """
    INSERT INTO task_state (procedure_key, fingerprint, task_id, done)
    VALUES %s
    ON CONFLICT (procedure_key, task_id) DO UPDATE SET
        done        = task_state.done OR EXCLUDED.done,
        fingerprint = EXCLUDED.fingerprint,
        updated_at  = now()
"""


def stored_fingerprints(conn, procedure_key: str) -> list[str]:
    """Fingerprinty dokumentów, dla których w bazie są wiersze procedure_key."""
    with conn.cursor() as cur:
        cur.execute(_FINGERPRINTS_SQL, (procedure_key,))
        return [fp for (fp,) in cur.fetchall()]


def load_snapshot(conn, procedure_key: str, fingerprint: str) -> Snapshot | None:
    """
    Odczytuje zapisaną migawkę procedury dla podanej wersji dokumentu.

    Returns:
        Snapshot lub None, gdy dla (procedure_key, fingerprint) nie ma wierszy.
    """
    with conn.cursor() as cur:
        cur.execute(_SELECT_SQL, (procedure_key, fingerprint))
        rows = cur.fetchall()

    if not rows:
        return None

    tasks = tuple(TaskState(id=int(task_id), done=bool(done)) for task_id, done in rows)
    return Snapshot(fingerprint=fingerprint, tasks=tasks)


def save_snapshot(conn, procedure_key: str, snapshot: Snapshot, reset: bool = False) -> int:
    """
    Zapisuje migawkę (upsert z OR na flagach).

    Z reset=True najpierw usuwa wiersze innych wersji dokumentu — bez tego
    nic nie jest kasowane.

    Returns:
        Liczba zapisanych wierszy.
    """
    rows = [
        (procedure_key, snapshot.fingerprint, t.id, t.done)
        for t in snapshot.tasks
    ]
    with conn.cursor() as cur:
        if reset:
            cur.execute(_DELETE_STALE_SQL, (procedure_key, snapshot.fingerprint))
        if rows:
            psycopg2.extras.execute_values(cur, _UPSERT_SQL, rows)
    conn.commit()
    return len(rows)
