"""
Services layer - Business logic goes here.

- report_store: the Firestore collection of reports
- report_service: create/list rules over the store
- upload_service + media: image hosting for report photos
"""
