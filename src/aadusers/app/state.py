class AppState:
    def __init__(self, credentials: dict | None = None):
        self.credentials = {"tenant_id": "", "client_id": "", "client_secret": ""}
        self.credentials.update(credentials or {})
        self.token = None  # MSAL app token for Graph
