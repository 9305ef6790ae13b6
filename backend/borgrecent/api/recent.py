"""Most recent archives API router."""

from fastapi import APIRouter, Depends

from borgrecent.core.borg import BorgRunner
from borgrecent.core.config import Settings, get_settings
from borgrecent.schemas.recent import RecentArchiveResponse, to_response
from borgrecent.services.recent import RecentArchivesService


router = APIRouter(tags=["recent"])


def get_runner(settings: Settings = Depends(get_settings)) -> BorgRunner:
    return BorgRunner(settings.borg_binary)


@router.get(
    "/recent",
    response_model=list[RecentArchiveResponse],
    response_model_exclude_none=True,
)
async def list_recent(
    settings: Settings = Depends(get_settings),
    runner: BorgRunner = Depends(get_runner),
) -> list[RecentArchiveResponse]:
    """Return the most recent archive of every repository under the root.

    Every request rescans the root and calls borg again; nothing is cached.
    Entries are sorted by archive date, oldest first. When artifact lookup is
    enabled each entry carries `mysql_date`, the modification time of the
    newest matching file inside that archive (empty string when none matched).
    """
    svc = RecentArchivesService(
        settings.root,
        runner,
        artifact_globs=settings.artifact_globs,
        concurrency=settings.concurrency,
    )
    entries = await svc.recent_entries(artifact_lookup=settings.artifact_lookup)
    return [to_response(entry, artifact_lookup=settings.artifact_lookup) for entry in entries]
