from prodrec.domain.record.port.repository import RecordRepository
from prodrec.domain.shared.uow import UoW


class RecordUnitOfWork(UoW):
    """Unit of work scoping one record mutation.

    ``records`` is only usable while the unit of work is open.
    """

    records: RecordRepository
