AUTHORIZATION_HEADER = "Authorization"

PASSWORD_POLICY_PATH = "/auth/v1/password_policy"

# authorization schemes
API_KEY_SCHEME = "API-Key"
BEARER_SCHEME = "Bearer"
