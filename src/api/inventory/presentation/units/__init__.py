from inventory.presentation.units.routes import router

__all__ = ["router"]
