"""NiceGUI interface - thin presentation layer over the features.

Responsibilities:
    - Navigation between landing page, assistant and form builder
    - Chat message display with streaming updates
    - Document upload, live form preview and raw JSON view
    - Saved-form library panel

Contains no business logic; state lives in clinic_assist.features.
"""
