"""
Basic usage example for the toolbox agent.

Seeds a small SQLite database, wires the runtime from the environment
(TOOLBOX_PROVIDER defaults to the keyword mock) and runs a short chat.
"""

import logging
import sqlite3
from dataclasses import replace

from toolbox_agent import FunctionTool
from toolbox_agent.config import Settings
from toolbox_agent.factory import ToolboxRuntime


def seed(database: str) -> None:
    with sqlite3.connect(database) as conn:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS tasks (id INTEGER PRIMARY KEY, title TEXT, created_at TEXT)"
        )
        conn.execute(
            "CREATE TABLE IF NOT EXISTS notes (id INTEGER PRIMARY KEY, body TEXT, created_at TEXT)"
        )
        conn.execute(
            "INSERT INTO tasks (title, created_at) VALUES ('water the plants', datetime('now'))"
        )


def word_count(arguments: dict) -> dict:
    return {"words": len(str(arguments["text"]).split())}


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    settings = replace(settings, database="example.db")
    seed(settings.database)

    with ToolboxRuntime.from_settings(settings) as runtime:
        runtime.registry.register(
            FunctionTool(
                name="word_count",
                description="Count the words in a piece of text",
                parameters={
                    "type": "object",
                    "properties": {"text": {"type": "string"}},
                    "required": ["text"],
                },
                func=word_count,
            )
        )
        agent = runtime.new_agent()
        for message in ("hello", "list my tasks", "show my notes"):
            print("You:", message)
            print("Agent:", agent.process(message))
        print("History:")
        for entry in agent.history():
            print(f"- {entry.role.value}: {entry.content[:100]}")


if __name__ == "__main__":
    main()
