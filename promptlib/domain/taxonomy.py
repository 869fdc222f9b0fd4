from __future__ import annotations

import enum


class PromptStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Department(str, enum.Enum):
    PROJECT_MANAGEMENT = "project-management"
    MARKETING = "marketing"
    SALES = "sales"
    ENGINEERING = "engineering"
    HR = "hr"
    FINANCE = "finance"
    DESIGN = "design"
    CUSTOMER_SUPPORT = "customer-support"
    EXECUTIVE = "executive"
    OPERATIONS = "operations"

    @property
    def label(self) -> str:
        return DEPARTMENT_LABELS[self]


class Category(str, enum.Enum):
    EMAIL = "email"
    DOCUMENTATION = "documentation"
    PLANNING = "planning"
    ANALYSIS = "analysis"
    COMMUNICATION = "communication"
    REPORTING = "reporting"
    TEAM_MANAGEMENT = "team-management"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


# Declaration order is display order.
DEPARTMENT_LABELS: dict[Department, str] = {
    Department.PROJECT_MANAGEMENT: "Project Management",
    Department.MARKETING: "Marketing",
    Department.SALES: "Sales",
    Department.ENGINEERING: "Engineering",
    Department.HR: "Human Resources",
    Department.FINANCE: "Finance",
    Department.DESIGN: "Design",
    Department.CUSTOMER_SUPPORT: "Customer Support",
    Department.EXECUTIVE: "Executive",
    Department.OPERATIONS: "Operations",
}

CATEGORY_LABELS: dict[Category, str] = {
    Category.EMAIL: "Email templates",
    Category.DOCUMENTATION: "Documentation",
    Category.PLANNING: "Planning",
    Category.ANALYSIS: "Analysis",
    Category.COMMUNICATION: "Communication",
    Category.REPORTING: "Reporting",
    Category.TEAM_MANAGEMENT: "Team Management",
}
