from prodrec.domain.record.port.repository import RecordRepository
from prodrec.domain.record.port.storage import BlobStoragePort
from prodrec.domain.record.port.uow import RecordUnitOfWork

__all__ = ["BlobStoragePort", "RecordRepository", "RecordUnitOfWork"]
