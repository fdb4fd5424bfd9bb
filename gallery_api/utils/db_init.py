"""
Database auto-initialization utilities
Handles table creation and bootstrap access code setup on startup
"""
from sqlalchemy import text, inspect, select
from flask import current_app
from gallery_api import db
from gallery_api.models import AccessCode
from gallery_api.services.access_code_store import AccessCodeStore, AccessCodeError


def check_database_connection():
    """Test if database connection is working"""
    try:
        db.session.execute(text('SELECT 1'))
        return True
    except Exception as e:
        current_app.logger.error(f"Database connection failed: {e}")
        return False


def check_tables_exist():
    """Check if all model tables exist"""
    inspector = inspect(db.engine)
    return all(inspector.has_table(table.name) for table in db.metadata.sorted_tables)


def create_database_tables():
    """Create all database tables"""
    try:
        current_app.logger.info("Creating database tables...")
        db.create_all()
        current_app.logger.info("Database tables created successfully")
        return True
    except Exception as e:
        current_app.logger.error(f"Failed to create database tables: {e}")
        return False


def seed_initial_access_code():
    """
    Create INITIAL_ACCESS_CODE when no access code exists yet.

    Registration needs a code and codes can only be managed by an admin, so
    a fresh deployment needs one code to register its first admin.
    """
    initial_code = current_app.config.get('INITIAL_ACCESS_CODE')
    if not initial_code:
        return True

    if db.session.execute(select(AccessCode.id).limit(1)).first() is not None:
        current_app.logger.info("Access codes exist - skipping bootstrap code")
        return True

    try:
        AccessCodeStore().create_code(
            initial_code,
            description='Bootstrap code for the first admin',
            max_uses=current_app.config.get('INITIAL_ACCESS_CODE_MAX_USES', 1)
        )
        current_app.logger.warning(
            "SECURITY: Bootstrap access code created; deactivate it once the first admin is registered"
        )
        return True
    except AccessCodeError as e:
        current_app.logger.error(f"Failed to create bootstrap access code: {e.message}")
        return False


def auto_initialize_database():
    """
    Auto-initialize database on startup
    - Check database connection
    - Create tables if needed
    - Seed the bootstrap access code if configured
    """
    current_app.logger.info("Checking database initialization...")

    if not check_database_connection():
        current_app.logger.error("Database connection failed")
        return False

    current_app.logger.info("Database connection successful")

    if not check_tables_exist():
        current_app.logger.info("First run detected - creating database tables...")
        if not create_database_tables():
            return False
    else:
        current_app.logger.info("Database tables exist")

    if not seed_initial_access_code():
        return False

    current_app.logger.info("Database initialization complete - system ready!")
    return True
