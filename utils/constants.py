"""
utils/constants.py

Purpose: Centralized static content

- All user-facing messages (Portuguese, WhatsApp markdown)
- Command keywords and greeting words
- Accounting API paths and payload constants

(Prevents hardcoding across the codebase)
"""

from decimal import Decimal

# ============================================================
# COMMAND KEYWORDS
# ============================================================

GREETINGS = frozenset({
    "oi", "olá", "ola", "bom dia", "boa tarde", "boa noite", "eai", "opa", "ei",
})

CONNECT_KEYWORDS = ("CONECTAR", "CONNECT")

MENU_KEYWORDS = frozenset({"menu", "ajuda", "help"})

MENU_OPTION_INCOME = "1"
MENU_OPTION_EXPENSE = "2"
MENU_OPTION_SUMMARY = "3"
MENU_OPTION_DISCONNECT = "4"

INCOME_KEYWORD = "entrada"
EXPENSE_KEYWORD = "saida"

# Link tokens are FinanZas user ids (UID)
ACCOUNT_ID_PATTERN = r"^[A-Za-z0-9]{20,}$"

# Transaction values: digits with an optional comma or dot decimal part
AMOUNT_PATTERN = r"^[0-9]+(?:[.,][0-9]+)?$"
MAX_AMOUNT = Decimal("999999999999.99")

# ============================================================
# ACCOUNTING API
# ============================================================

INCOME_ENDPOINT = "/entradas"
EXPENSE_ENDPOINT = "/saidas"

DEFAULT_INCOME_DESCRIPTION = "Entrada via WhatsApp"
DEFAULT_EXPENSE_DESCRIPTION = "Saída via WhatsApp"

INCOME_SALARY_MARKERS = ("salário", "fixo")
EXPENSE_FIXED_MARKER = "fixa"

EXPENSE_TYPE_FIXED = "fixa"
EXPENSE_TYPE_VARIABLE = "variável"

INCOME_LABEL = "Entrada"
EXPENSE_LABEL = "Saída"

# ============================================================
# WELCOME & LINKING
# ============================================================

WELCOME_MESSAGE = """Seja bem vindo(a) ao WhatsApp do FinanZas!
Para usufruir completamente da ferramenta, entre no site {site_url}
Realize o login/cadastro. No menu "Configurações", copie o seu "ID de Usuário (UID)".
Cole esse ID aqui no chat da seguinte forma:

CONECTAR SEU_ID_AQUI"""

INVALID_ACCOUNT_ID_MESSAGE = (
    "❌ ID de usuário inválido. Verifique o ID no site (Menu > Configurações) "
    "e tente novamente. Ex: CONECTAR A1B2C3D4E5..."
)

CONNECTED_MESSAGE = "✅ Pronto, agora você está autenticado! \n\nDigite *MENU* para ver as opções."

NOT_LINKED_MESSAGE = (
    'Olá! Parece que você ainda não se conectou. '
    'Envie "oi" ou "olá" para ver as instruções de como começar.'
)

# ============================================================
# MENU
# ============================================================

MENU_MESSAGE = """*Menu Principal*
Digite o *número* da opção desejada:

1️⃣ - Registrar Entrada
2️⃣ - Registrar Saída
3️⃣ - Resumo Financeiro (Em breve!)
4️⃣ - Desconectar"""

ASK_INCOME_MESSAGE = (
    "Ok, vamos registrar uma *Entrada*.\n\n"
    "Por favor, digite o *valor* e a *descrição*.\n(Ex: 2000 salário)"
)

ASK_EXPENSE_MESSAGE = (
    "Ok, vamos registrar uma *Saída*.\n\n"
    "Por favor, digite o *valor* e a *descrição*.\n(Ex: 45 almoço)"
)

SUMMARY_COMING_SOON_MESSAGE = (
    'Esta funcionalidade ("Resumo Financeiro") ainda está em desenvolvimento. '
    "Em breve você poderá ver seu resumo por aqui!"
)

DISCONNECTED_MESSAGE = (
    "Sessão encerrada. Você foi desconectado. 👋\n\n"
    'Para usar o bot novamente, envie "oi".'
)

INVALID_OPTION_MESSAGE = "Opção inválida. Por favor, digite *MENU* para ver as opções novamente."

UNKNOWN_COMMAND_MESSAGE = "Comando não reconhecido. Digite *MENU* para ver a lista de opções."

# ============================================================
# TRANSACTIONS
# ============================================================

INVALID_AMOUNT_MESSAGE = (
    "❌ Valor inválido. Use o formato: [valor] [descrição].\nEx: 100 salário"
)

TRANSACTION_SUCCESS_MESSAGE = (
    "✅ {label} de {amount} ({description}) registrada com sucesso no FinanZas!"
)

NEXT_ACTION_MESSAGE = "O que deseja fazer agora? Digite *MENU* para ver as opções."

TRANSACTION_ERROR_PREFIX = "❌ Ocorreu um erro: "

API_NOT_FOUND_MESSAGE = (
    "O endpoint da API não foi encontrado (404). Verifique se o backend está "
    "na URL correta e rodando na porta configurada."
)

API_CONNECTION_REFUSED_MESSAGE = (
    "Conexão recusada. O backend do FinanZas não está rodando no endereço especificado."
)

API_BAD_REQUEST_MESSAGE = (
    "Requisição inválida (400). Verifique se os dados da transação estão no formato correto."
)

API_UNKNOWN_ERROR_MESSAGE = "Erro desconhecido ao registrar a transação."

# ============================================================
# GENERIC
# ============================================================

GENERIC_ERROR_MESSAGE = "❌ Algo deu errado. Por favor, tente novamente ou digite *MENU*."
