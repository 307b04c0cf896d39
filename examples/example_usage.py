"""Example: using the service layer without Flask.

Controllers are a thin layer; registration rules live in the services.
"""

from src.family_registry.family_registry.container import build_container
from src.family_registry.family_registry.families.model import Student
from src.family_registry.family_registry.families.validation import FamilyForm
from src.family_registry.family_registry.storage.memory_storage import InMemoryKeyValueStorage


def main():
    container = build_container(
        storage=InMemoryKeyValueStorage(),
        admin_username="admin",
        admin_password_hash="",
    )
    family = container.family_service.register(
        FamilyForm(
            guardian_nic="199012345678",
            guardian_name="M. Rizwan",
            primary_student=Student("Aisha Rizwan", "10001", "6A"),
            siblings=[Student("Omar Rizwan", "10002", "3B")],
        )
    )
    print(family.id)
    print(container.transfer_service.export_csv())
    print(container.report_service.overview())


if __name__ == "__main__":
    main()
