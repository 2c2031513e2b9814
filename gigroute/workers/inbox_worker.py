"""Inbox worker: ingests shared or pasted job text dropped into a directory"""

import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from gigroute.models.job import JobSource
from gigroute.services.job_parser import JobParser
from gigroute.services.platform_rules import MANUAL_PLATFORM, get_profile, normalize_platform
from gigroute.utils.csv_writer import safe_write_csv
from gigroute.utils.redis_client import DraftCache, text_fingerprint
from gigroute.workers.base_worker import BaseWorker


class InboxWorker(BaseWorker):
    """
    Worker that parses text files from an inbox directory into job drafts

    Each cycle picks up every *.txt file in the inbox, parses it, skips
    postings already seen (when Redis is reachable), appends the drafts to
    <output_dir>/drafts.csv and moves the file into inbox/processed.

    The platform of a file comes from the worker's configured platform, or
    else from the file name prefix: 'instacart_0412.txt' is parsed as an
    Instacart posting.
    """

    PROCESSED_DIR = "processed"
    DRAFTS_FILE = "drafts.csv"

    def __init__(
        self,
        name: str,
        interval: int = 60,
        inbox_dir: str = "inbox",
        output_dir: str = "output",
        platform: Optional[str] = None,
        use_cache: bool = True,
        redis_host: Optional[str] = None,
        redis_port: Optional[int] = None,
        redis_db: Optional[int] = None
    ):
        """
        Initialize inbox worker

        Args:
            name: Worker name
            interval: Seconds between inbox scans
            inbox_dir: Directory watched for *.txt files
            output_dir: Directory for the drafts CSV
            platform: Platform applied to every file (None to use file names)
            use_cache: Skip already-ingested text using Redis
            redis_host: Redis server host (defaults to env REDIS_HOST or 'localhost')
            redis_port: Redis server port (defaults to env REDIS_PORT or 6379)
            redis_db: Redis database number (defaults to env REDIS_DB or 0)
        """
        super().__init__(name, interval)

        self.inbox_dir = Path(inbox_dir)
        self.output_dir = Path(output_dir)
        self.platform = normalize_platform(platform)
        self.use_cache = use_cache
        self.redis_host = redis_host
        self.redis_port = redis_port
        self.redis_db = redis_db

        self.scan_count = 0
        self.total_drafts = 0

        # Parser and cache are created in the worker process
        self._parser: Optional[JobParser] = None
        self._cache: Optional[DraftCache] = None
        self._cache_attempted = False

    @classmethod
    def from_config(cls, config, app_config=None) -> 'InboxWorker':
        """
        Build an inbox worker from its configuration entry

        Settings under `config`: inbox_dir, output_dir (defaults to the
        application output_dir), platform, use_cache. Redis settings come
        from the application config.
        """
        settings = config.config or {}

        kwargs = {}
        if app_config is not None:
            kwargs = {
                'output_dir': app_config.output_dir,
                'redis_host': app_config.redis.host,
                'redis_port': app_config.redis.port,
                'redis_db': app_config.redis.db
            }
        if settings.get('output_dir'):
            kwargs['output_dir'] = settings['output_dir']

        return cls(
            name=config.name,
            interval=config.interval,
            inbox_dir=settings.get('inbox_dir') or 'inbox',
            platform=settings.get('platform'),
            use_cache=bool(settings.get('use_cache', True)),
            **kwargs
        )

    def _initialize(self) -> None:
        if self._parser is None:
            self._parser = JobParser()

        if self.use_cache and not self._cache_attempted:
            self._cache_attempted = True
            try:
                self._cache = DraftCache(
                    host=self.redis_host,
                    port=self.redis_port,
                    db=self.redis_db
                )
                self.logger.info("Redis draft cache initialized")
            except Exception as e:
                self.logger.error(f"Failed to initialize Redis draft cache, duplicates won't be skipped: {e}")
                self._cache = None

    def platform_for(self, path: Path) -> Optional[str]:
        """
        Resolve the platform of an inbox file

        Returns:
            Configured platform, else a known platform named by the file
            prefix, else None
        """
        if self.platform:
            return self.platform

        prefix = re.split(r"[_\-\s]", path.stem, maxsplit=1)[0]
        candidate = normalize_platform(prefix)
        if candidate == MANUAL_PLATFORM or get_profile(candidate) is not None:
            return candidate

        return None

    def pending_files(self) -> List[Path]:
        """Text files waiting in the inbox, oldest name first"""
        if not self.inbox_dir.is_dir():
            return []
        return sorted(p for p in self.inbox_dir.glob("*.txt") if p.is_file())

    def do_work(self) -> None:
        """Parse every pending inbox file and save the drafts"""
        self._initialize()
        self.scan_count += 1

        files = self.pending_files()
        if not files:
            self.logger.debug(f"Worker '{self.name}' found no files in {self.inbox_dir}")
            return

        self.logger.info(
            f"Worker '{self.name}' scan #{self.scan_count}: {len(files)} file(s) in {self.inbox_dir}"
        )

        rows = []
        parsed = []
        skipped = []

        for path in files:
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                self.logger.error(f"Failed to read {path}: {e}")
                continue

            platform = self.platform_for(path)
            cache_key = platform or MANUAL_PLATFORM

            if self._cache is not None and self._cache.is_cached(cache_key, text):
                self.logger.info(f"Skipping duplicate posting in {path.name}")
                skipped.append(path)
                continue

            draft = self._parser.parse_text(text, platform)

            row = draft.to_dict()
            row['source'] = JobSource.SHARE_TARGET
            row['source_file'] = path.name
            row['text_hash'] = text_fingerprint(text)
            row['ingested_at'] = datetime.now().isoformat()
            rows.append(row)
            parsed.append((path, cache_key, text))

        if rows:
            drafts_file = self.output_dir / self.DRAFTS_FILE
            if not safe_write_csv(str(drafts_file), rows, logger=self.logger, dedupe_on=['text_hash']):
                self.logger.error(f"Drafts not saved, leaving {len(rows)} file(s) in the inbox")
                self._archive(skipped)
                return
            self.total_drafts += len(rows)

        # Only remember postings once their drafts are on disk
        if self._cache is not None:
            for _path, cache_key, text in parsed:
                self._cache.cache_text(cache_key, text)

        self._archive(skipped + [path for path, _cache_key, _text in parsed])
        duplicates = len(skipped)

        self.logger.info(
            f"Worker '{self.name}' saved {len(rows)} draft(s), skipped {duplicates} duplicate(s) "
            f"(Total: {self.total_drafts} across {self.scan_count} scans)"
        )

    def _archive(self, paths: List[Path]) -> None:
        if not paths:
            return

        processed_dir = self.inbox_dir / self.PROCESSED_DIR
        processed_dir.mkdir(parents=True, exist_ok=True)

        for path in paths:
            try:
                path.replace(processed_dir / path.name)
            except OSError as e:
                self.logger.error(f"Failed to move {path} to {processed_dir}: {e}")
