"""
Store layer connecting the API with the database.

Contents
--------
- credential_store.CredentialStore
    Registration, login and user lookup.
- conversation_store.ConversationStore
    Thread lookup (owner-only), creation, listing, renaming and append-only saving.
"""
