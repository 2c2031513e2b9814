"""Parsed job draft model"""

from dataclasses import dataclass
from typing import Optional

from gigroute.models.job import Job, JobSource, JobStatus, to_float


@dataclass
class JobDraft:
    """
    Best-effort job record produced by the text parser

    Attributes:
        title: Job title (at most 100 characters)
        description: Short description or feature summary
        platform: Platform id, 'manual' when unknown
        payout: Pay amount as it appeared in the text ('0' if none)
        address: Extracted address or a platform placeholder
        estimated_duration: Minutes
    """
    title: str
    description: str
    platform: str
    payout: str
    address: str
    estimated_duration: int

    def to_dict(self) -> dict:
        """Convert draft to dictionary"""
        return {
            'title': self.title,
            'description': self.description,
            'platform': self.platform,
            'payout': self.payout,
            'address': self.address,
            'estimated_duration': self.estimated_duration
        }

    def to_job(
        self,
        source: str = JobSource.CLIPBOARD,
        original_text: Optional[str] = None
    ) -> Job:
        """
        Turn the draft into an available Job

        Args:
            source: How the text was captured (clipboard, share_target, ...)
            original_text: Raw text kept in metadata for later review

        Returns:
            Job with status 'available' and no id
        """
        metadata = {}
        if original_text is not None:
            metadata['original_text'] = original_text

        return Job(
            title=self.title,
            description=self.description,
            platform=self.platform,
            source=source,
            payout=to_float(self.payout, 0.0),
            address=self.address,
            estimated_duration=self.estimated_duration,
            status=JobStatus.AVAILABLE,
            metadata=metadata
        )
