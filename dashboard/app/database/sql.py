"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Statement execution for the data-source store.
"""

import logging
from typing import Optional, Sequence

import oracledb

LOGGER = logging.getLogger(__name__)

# ORA-00955: name is already used by an existing object
DDL_IGNORED_CODES = (955,)


def ora_code(exc: oracledb.DatabaseError) -> Optional[int]:
    """Return the ORA error number carried by *exc*, if any."""

    error = exc.args[0] if exc.args else None
    return getattr(error, "code", None)


async def _materialize(row: Sequence) -> tuple:
    """Read LOB columns so rows can outlive the cursor."""

    values = []
    for value in row:
        if isinstance(value, oracledb.AsyncLOB):
            value = await value.read()
        values.append(value)
    return tuple(values)


async def execute_sql(
    conn: oracledb.AsyncConnection,
    sql: str,
    binds: Optional[dict] = None,
    ignore_codes: tuple[int, ...] = (),
) -> Optional[list[tuple]]:
    """Run one statement on *conn*.

    Queries return their rows with LOBs already read; other statements return
    None. A ``DatabaseError`` whose ORA code is in *ignore_codes* is logged and
    treated as success.
    """
    LOGGER.debug("execute_sql: %s | binds=%s", sql.strip()[:120], binds)

    async with conn.cursor() as cursor:
        try:
            if binds:
                await cursor.execute(sql, binds)
            else:
                await cursor.execute(sql)
        except oracledb.DatabaseError as exc:
            code = ora_code(exc)
            if code is None or code not in ignore_codes:
                raise
            LOGGER.info("Ignoring ORA-%05d: %s", code, exc.args[0].message.strip())
            return None

        if not cursor.description:
            return None
        return [await _materialize(row) for row in await cursor.fetchall()]
