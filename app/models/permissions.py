"""Permission policy value types owned by each team member."""

from pydantic import BaseModel, ConfigDict, Field

from app.models.role import DataScope


class ModulePermission(BaseModel):
    """CRUD flags for a single dashboard module"""

    view: bool = False
    create: bool = False
    edit: bool = False
    delete: bool = False

    model_config = ConfigDict(extra="forbid")


class ModulePermissions(BaseModel):
    """One ModulePermission per AppModule"""

    dashboard: ModulePermission = Field(default_factory=ModulePermission)
    tasks: ModulePermission = Field(default_factory=ModulePermission)
    clients: ModulePermission = Field(default_factory=ModulePermission)
    calendar: ModulePermission = Field(default_factory=ModulePermission)
    team: ModulePermission = Field(default_factory=ModulePermission)
    analytics: ModulePermission = Field(default_factory=ModulePermission)
    tags: ModulePermission = Field(default_factory=ModulePermission)
    settings: ModulePermission = Field(default_factory=ModulePermission)

    model_config = ConfigDict(extra="forbid")


class AdminPermissions(BaseModel):
    """Administrative capability flags"""

    manage_users: bool = False
    manage_roles: bool = False
    manage_permissions: bool = False
    view_reports: bool = False
    export_data: bool = False
    manage_billing: bool = False

    model_config = ConfigDict(extra="forbid")


class Permissions(BaseModel):
    """
    Full capability bundle of a team member.

    Equality is structural: two policies are equal when every module flag,
    every admin flag and the data scope match. Stored as JSON on the
    team_members row and validated back into this model on read.
    """

    modules: ModulePermissions = Field(default_factory=ModulePermissions)
    admin: AdminPermissions = Field(default_factory=AdminPermissions)
    data_scope: DataScope = DataScope.OWN

    model_config = ConfigDict(extra="forbid")

    def clone(self) -> "Permissions":
        """Return an independent deep copy"""
        return self.model_copy(deep=True)
