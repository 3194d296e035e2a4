from __future__ import annotations

import importlib

from timekeeper.database.bootstrap import seed_default_admin
from timekeeper.database.connection import DatabaseConnection, DBConfig
from timekeeper.settings import get_settings_module
from timekeeper.users.mysql_user_repository import MySQLUserRepository


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    users = MySQLUserRepository(DatabaseConnection.get_instance(config))

    if seed_default_admin(users):
        print(f"OK: Seeded default admin -> {config.user}@{config.host}:{config.port}/{config.database}")
    else:
        print("SKIP: users table is not empty")


if __name__ == "__main__":
    main()
