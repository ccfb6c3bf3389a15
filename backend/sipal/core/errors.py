class SipalError(Exception):
    """Base class for data-integrity failures raised by the domain services."""

    fallback_message = "Unable to compute status"


class InvalidEnrollmentStatus(SipalError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unrecognized enrollment status: {value!r}")


class MalformedCareerRecord(SipalError, ValueError):
    def __init__(self, record_id, status, reason: str):
        self.record_id = record_id
        self.status = status
        self.reason = reason
        super().__init__(f"Career record {record_id} tagged {status!r} is malformed: {reason}")
