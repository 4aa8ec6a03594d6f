# User-facing error messages, kept in French as served to the web client.

PASSWORD_TOO_SHORT = "Le mot de passe doit contenir au moins 4 caractères"
USERNAME_LENGTH = "Votre identifiant doit contenir entre 2 et 20 caractères"
USERNAME_CHARSET = "Votre identifiant ne doit contenir que des lettres minuscules non accentuées"
USERNAME_TAKEN = "Cet identifiant est déjà associé à un compte"
UNKNOWN_IDENTIFIER = "Cet identifiant est inconnu"

MISSING_TOKEN = "Unauthorize user"
NOT_CONNECTED = "Utilisateur non connecté"
NOTE_FORBIDDEN = "Accès non autorisé à cette note"

INTERNAL_SERVER_ERROR = "Internal server error."
