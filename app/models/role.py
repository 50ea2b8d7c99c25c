"""Team role and permission enums for the hierarchy engine."""

from enum import Enum as PyEnum


class TeamRole(str, PyEnum):
    """
    Team roles ordered by seniority.

    Rank (most to least senior):
    1. CEO - root of the organization, manages everyone
    2. C_LEVEL - executive team
    3. DIRECTOR - heads a department
    4. MANAGER - manages a team
    5. TEAM_LEAD - technical lead, no people management by default
    6. SENIOR
    7. MID_LEVEL
    8. JUNIOR
    9. INTERN

    The rank table itself lives in app.core.role_catalog.
    """

    CEO = "ceo"
    C_LEVEL = "c_level"
    DIRECTOR = "director"
    MANAGER = "manager"
    TEAM_LEAD = "team_lead"
    SENIOR = "senior"
    MID_LEVEL = "mid_level"
    JUNIOR = "junior"
    INTERN = "intern"


class Department(str, PyEnum):
    """Department a team member belongs to"""

    ENGINEERING = "engineering"
    PRODUCT = "product"
    DESIGN = "design"
    MARKETING = "marketing"
    SALES = "sales"
    CUSTOMER_SUCCESS = "customer_success"
    FINANCE = "finance"
    HR = "hr"
    OPERATIONS = "operations"
    OTHER = "other"


class MemberStatus(str, PyEnum):
    """Employment status of a team member"""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"


class DataScope(str, PyEnum):
    """
    Which records a view query may return for a member.

    - ALL: every record in the tenant
    - TEAM: records owned by the member or their team
    - OWN: only records owned by the member
    """

    ALL = "all"
    TEAM = "team"
    OWN = "own"


class AppModule(str, PyEnum):
    """Dashboard modules guarded by per-action permissions"""

    DASHBOARD = "dashboard"
    TASKS = "tasks"
    CLIENTS = "clients"
    CALENDAR = "calendar"
    TEAM = "team"
    ANALYTICS = "analytics"
    TAGS = "tags"
    SETTINGS = "settings"


class PermissionAction(str, PyEnum):
    """CRUD action on a module"""

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"


class AdminPermission(str, PyEnum):
    """Administrative capabilities independent of modules"""

    MANAGE_USERS = "manage_users"
    MANAGE_ROLES = "manage_roles"
    MANAGE_PERMISSIONS = "manage_permissions"
    VIEW_REPORTS = "view_reports"
    EXPORT_DATA = "export_data"
    MANAGE_BILLING = "manage_billing"
