"""Admission control."""

from provision_ai.services.admission.limiter import AdmissionLimiter, AdmissionRejected

__all__ = ["AdmissionLimiter", "AdmissionRejected"]
