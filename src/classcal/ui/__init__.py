"""UI components for ClassCal."""

# Note: UI imports are deferred to avoid PyQt6 dependency for non-UI usage
# Import specific components as needed:
# from classcal.ui.main_window import ScheduleWindow
# from classcal.ui.error_messages import get_user_friendly_error
