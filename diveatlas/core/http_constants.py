"""Constantes HTTP pour éviter les valeurs magiques dans le code.

Ce module définit les codes de statut HTTP utilisés par l'API du catalogue ainsi que les bornes
métier partagées entre la validation et les tests.
"""

# Codes de statut HTTP courants
HTTP_OK = 200
HTTP_CREATED = 201
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_INTERNAL_SERVER_ERROR = 500
HTTP_SERVICE_UNAVAILABLE = 503

# Avis
RATING_MIN = 1
RATING_MAX = 10
REVIEW_TITLE_MAX_LEN = 100
REVIEW_CONTENT_MIN_LEN = 10
REVIEW_CONTENT_MAX_LEN = 2000

# Comptes
PASSWORD_MIN_LEN = 6

# Catalogue
MAX_PAGE = 1_000_000
