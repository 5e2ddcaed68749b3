"""Constants for contact service types and the localized API messages."""

from enum import Enum


class ServiceType(str, Enum):
    """Enumeration of the services offered on the contact form."""

    landing_page = "landing-page"
    e_commerce = "e-commerce"
    e_learning = "e-learning"
    other = "outro"

    @classmethod
    def _missing_(cls, value):
        # The form has been published with the English spelling too
        if isinstance(value, str) and value.strip().lower() == "other":
            return cls.other
        return None


class StoreBackend(str, Enum):
    """Enumeration of the supported persistence backends."""

    sql = "sql"
    mongo = "mongo"


COMPANY_NAME = "WebCreative"

# ------------------------------
# Success messages
# ------------------------------
MSG_CONTACT_SENT = "Mensagem enviada com sucesso!"
MSG_CONTACT_DELETED = "Contato removido com sucesso"

# ------------------------------
# Error messages
# ------------------------------
ERR_REQUIRED_FIELDS = "Todos os campos obrigatórios devem ser preenchidos"
ERR_INVALID_SERVICE = "Serviço inválido"
ERR_INVALID_EMAIL = "E-mail inválido"
ERR_INVALID_BODY = "Dados do formulário inválidos"
ERR_UNAUTHORIZED = "Não autorizado"
ERR_NOT_FOUND = "Contato não encontrado"
ERR_METHOD_NOT_ALLOWED = "Método não permitido"
ERR_RATE_LIMITED = "Muitas solicitações. Tente novamente mais tarde."
ERR_CREATE_FAILED = "Erro ao processar sua solicitação"
ERR_LIST_FAILED = "Erro ao buscar contatos"
ERR_GET_FAILED = "Erro ao buscar contato"
ERR_UPDATE_FAILED = "Erro ao atualizar contato"
ERR_DELETE_FAILED = "Erro ao remover contato"
