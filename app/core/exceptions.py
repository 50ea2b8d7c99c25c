class TeamApiException(Exception):
    """Base exception for the team hierarchy API"""

    code = "error"


class UnauthorizedException(TeamApiException):
    """Raised when JWT validation fails"""

    code = "unauthorized"


class NotFoundException(TeamApiException):
    """Raised when resource not found"""

    code = "not_found"


class ForbiddenException(TeamApiException):
    """Raised when a member tries to act outside their authority"""

    code = "forbidden"


class ValidationException(TeamApiException):
    """Raised for business logic validation errors"""

    code = "validation_error"


# Structural errors: recoverable, caller-facing hierarchy failures.
# The caller must reject the edit and perform no mutation.


class StructuralError(ValidationException):
    """Base for hierarchy structure violations"""

    code = "structural_error"


class MissingRootError(StructuralError):
    """Raised when the member snapshot has no CEO to root the hierarchy"""

    code = "missing_root"


class CycleDetectedError(StructuralError):
    """Raised when walking manager links loops back on itself"""

    code = "cycle_detected"


class SelfAssignmentError(StructuralError):
    """Raised when a member is proposed as their own manager"""

    code = "self_assignment"


class CycleWouldFormError(StructuralError):
    """Raised when the proposed manager is a subordinate of the member"""

    code = "cycle_would_form"


class ManagerNotSeniorError(StructuralError):
    """Raised when the proposed manager does not outrank the member"""

    code = "manager_not_senior"


class UnknownMemberError(NotFoundException):
    """Raised when a member id is not part of the hierarchy snapshot"""

    code = "unknown_member"

    def __init__(self, member_id: str):
        super().__init__(f"Member {member_id} not found")
        self.member_id = member_id


# Policy lookups with keys outside the closed enum sets


class PolicyKeyError(ValidationException):
    """Base for unknown policy keys"""

    code = "invalid_policy_key"


class InvalidModuleError(PolicyKeyError):
    code = "invalid_module"


class InvalidActionError(PolicyKeyError):
    code = "invalid_action"


class InvalidAdminPermissionError(PolicyKeyError):
    code = "invalid_admin_permission"
