#!/usr/bin/env python3
"""
Example usage of the libsql batch client
"""

import asyncio

from libsql_batch import BatchError, ConfigError, connect_from_config


async def main() -> None:
    try:
        db = connect_from_config()
    except ConfigError as e:
        print(f"Missing configuration: {e}")
        return

    try:
        results = await db.batch(
            [
                "CREATE TABLE IF NOT EXISTS logs (action TEXT, user_id INTEGER)",
                ("INSERT INTO logs (action, user_id) VALUES (?, ?)", ["login", 1]),
                "SELECT COUNT(*) AS total FROM logs",
            ]
        )
    except BatchError as e:
        print(f"Batch failed: {e.code} - {e}")
        return

    for result in results:
        if result.success and result.result_set is not None:
            print(result.result_set.as_dicts())
        else:
            print(f"Statement failed: {result.error}")


if __name__ == "__main__":
    asyncio.run(main())
