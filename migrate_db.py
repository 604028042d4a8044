# migrate_db.py
"""
Add columns introduced after the first release to an existing database.
Safe to run repeatedly; new databases get every column from db.create_all().
"""
import logging

from sqlalchemy import inspect
from app import create_app
from app.extensions import db

logger = logging.getLogger('migrate_db')

# table -> [(column, type, default SQL literal or None)]
NEW_COLUMNS = {
    'form': [
        ('header_image', 'TEXT', "''"),
        ('created_by', 'VARCHAR(100)', "'anonymous'"),
        ('settings', 'JSON', None),
    ],
    'response': [
        ('completion_time', 'FLOAT', '0'),
        ('is_complete', 'BOOLEAN', 'TRUE'),
        ('session_id', 'VARCHAR(128)', "''"),
    ],
}


def missing_columns(connection, table_name):
    existing = {col['name'] for col in inspect(connection).get_columns(table_name)}
    return [spec for spec in NEW_COLUMNS[table_name] if spec[0] not in existing]


def migrate_database(app=None):
    """Add any missing columns; returns the list of (table, column) added"""
    app = app or create_app()
    added = []

    with app.app_context():
        logger.info('Database migration started')

        with db.engine.begin() as connection:
            for table_name in NEW_COLUMNS:
                for col_name, col_type, default_val in missing_columns(connection, table_name):
                    if default_val is not None:
                        query = f'ALTER TABLE {table_name} ADD COLUMN {col_name} {col_type} DEFAULT {default_val}'
                    else:
                        query = f'ALTER TABLE {table_name} ADD COLUMN {col_name} {col_type}'

                    connection.execute(db.text(query))
                    added.append((table_name, col_name))
                    logger.info('Added %s.%s', table_name, col_name)

        logger.info('Database migration finished, %d columns added', len(added))

    return added


if __name__ == '__main__':
    migrate_database()
