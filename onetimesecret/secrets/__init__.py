"""Secret sharing domains and workflows."""
