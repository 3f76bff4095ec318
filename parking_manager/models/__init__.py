# Parking Manager: database models
# Import all models here for SQLAlchemy discovery

from parking_manager.models.stored_document import StoredDocument   # noqa
