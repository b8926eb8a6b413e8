# Visits Feature
#
# `VisitRecorder` is the in-process session API for a recording view; the
# router exposes the same engines over HTTP.

from app.features.visits.models import Visit
from app.features.visits.recorder import AutosaveScheduler, VisitRecorder
from app.features.visits.router import router
from app.features.visits.service import VisitService

__all__ = ["Visit", "AutosaveScheduler", "VisitRecorder", "router", "VisitService"]
