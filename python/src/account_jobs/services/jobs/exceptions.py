"""
Exception hierarchy for account jobs.

``InvalidJobInputError`` is the precondition tier and is raised to the
caller. Every other ``JobError`` (and any collaborator failure) is turned
into a failed ``JobResult`` by the job services.
"""


class JobError(Exception):
    """Base exception for account job failures."""
    pass


class InvalidJobInputError(ValueError):
    """Job invoked without a user id. Raised before any external call."""
    
    def __init__(self, message: str = "User ID is required."):
        super().__init__(message)


class WorkspaceNotFoundError(JobError):
    """The account's workspace document does not exist."""
    
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Workspace Doc with ID {user_id} not found.")


class NoExportDataError(JobError):
    """The account has no expenses to export."""
    
    def __init__(self, user_email: str):
        self.user_email = user_email
        super().__init__(f"No expense data found for {user_email}.")
