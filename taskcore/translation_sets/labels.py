"""
Task rule messages — Translation Set (i18n).

Resolution chain: explicit lang → context preferred_language → "pt" → key name.
Placeholders are filled from the owning rule's params ({min_trimmed},
{max_length}, {choices}).
"""

RULE_MESSAGES = {
    # --- Title ---
    "title_required": {
        "pt": "O título é obrigatório",
        "en": "Title is required",
    },
    "title_type": {
        "pt": "O título deve ser um texto",
        "en": "Title must be text",
    },
    "title_max_length": {
        "pt": "O título não pode exceder {max_length} caracteres",
        "en": "Title cannot exceed {max_length} characters",
    },
    "title_blank": {
        "pt": "O título não pode conter apenas espaços em branco",
        "en": "Title cannot contain only whitespace",
    },
    "title_min_length": {
        "pt": "O título deve ter pelo menos {min_trimmed} caracteres",
        "en": "Title must have at least {min_trimmed} characters",
    },

    # --- Description ---
    "description_type": {
        "pt": "A descrição deve ser um texto",
        "en": "Description must be text",
    },
    "description_max_length": {
        "pt": "A descrição não pode exceder {max_length} caracteres",
        "en": "Description cannot exceed {max_length} characters",
    },

    # --- Due date ---
    "due_date_type": {
        "pt": "A data de vencimento deve ser um texto no formato AAAA-MM-DD",
        "en": "Due date must be a string in YYYY-MM-DD format",
    },
    "due_date_format": {
        "pt": "Formato de data inválido. Use AAAA-MM-DD",
        "en": "Invalid date format. Use YYYY-MM-DD",
    },
    "due_date_past": {
        "pt": "A data de vencimento não pode ser anterior à data atual",
        "en": "Due date cannot be earlier than the current date",
    },

    # --- Priority ---
    "priority_choice": {
        "pt": "Selecione uma prioridade válida: {choices}",
        "en": "Select a valid priority: {choices}",
    },

    # --- Envelope / glue ---
    "or": {
        "pt": "ou",
        "en": "or",
    },
    "invalid_body": {
        "pt": "O corpo da requisição deve ser um objeto JSON",
        "en": "Request body must be a JSON object",
    },
}
