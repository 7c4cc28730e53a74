from inventory.presentation.projects.routes import router

__all__ = ["router"]
