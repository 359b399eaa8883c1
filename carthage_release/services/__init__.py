"""Release services: manifest handling, archiving, and the packaging pipeline."""

from carthage_release.services.release import ReleaseOutcome, ReleasePackager, generate_release

__all__ = ["ReleaseOutcome", "ReleasePackager", "generate_release"]
