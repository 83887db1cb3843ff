from dishka import provide

from prodrec.config import Config
from prodrec.domain.record.command.create import CreateRecordHandler
from prodrec.domain.record.command.delete import DeleteRecordHandler
from prodrec.domain.record.command.finalize import FinalizeRecordHandler
from prodrec.domain.record.command.modify import ModifyRecordHandler
from prodrec.domain.record.port.storage import BlobStoragePort
from prodrec.domain.record.query.download_file import DownloadFileHandler
from prodrec.domain.record.query.get_record import GetRecordHandler
from prodrec.domain.record.query.list_records import ListRecordsHandler
from prodrec.domain.record.query.list_versions import ListVersionsHandler
from prodrec.domain.record.query.version_history import GetVersionHistoryHandler
from prodrec.domain.record.service.policy import FilePolicy
from prodrec.domain.record.service.query import RecordQueryService
from prodrec.domain.record.service.versioning import VersioningService
from prodrec.util.di.base import Provider
from prodrec.util.di.scope import Scope


class RecordProvider(Provider):
    @provide(scope=Scope.APP)
    def get_file_policy(self, config: Config) -> FilePolicy:
        return config.storage.file_policy()

    @provide(scope=Scope.APP)
    def get_versioning_service(
        self,
        storage: BlobStoragePort,
        policy: FilePolicy,
        config: Config,
    ) -> VersioningService:
        return VersioningService(
            storage=storage,
            policy=policy,
            name_collision_attempts=config.storage.name_collision_attempts,
        )

    @provide(scope=Scope.APP)
    def get_query_service(self, storage: BlobStoragePort) -> RecordQueryService:
        return RecordQueryService(storage=storage)

    # Command Handlers
    create_handler = provide(CreateRecordHandler, scope=Scope.UOW)
    modify_handler = provide(ModifyRecordHandler, scope=Scope.UOW)
    finalize_handler = provide(FinalizeRecordHandler, scope=Scope.UOW)
    delete_handler = provide(DeleteRecordHandler, scope=Scope.UOW)

    # Query Handlers
    get_record_handler = provide(GetRecordHandler, scope=Scope.UOW)
    list_records_handler = provide(ListRecordsHandler, scope=Scope.UOW)
    list_versions_handler = provide(ListVersionsHandler, scope=Scope.UOW)
    version_history_handler = provide(GetVersionHistoryHandler, scope=Scope.UOW)
    download_file_handler = provide(DownloadFileHandler, scope=Scope.UOW)
