"""Static reference data used where no live collection exists yet."""

from odontoapp.core.mirror import FallbackPolicy, FallbackSource

DENTISTS = [
    {
        "id": 1,
        "nome": "Dra. Ana Souza",
        "cro": "CRO-SP 12345",
        "especialidade": "Ortodontia",
        "telefone": "(11) 98765-4321",
    },
    {
        "id": 2,
        "nome": "Dr. Carlos Pereira",
        "cro": "CRO-SP 54321",
        "especialidade": "Endodontia",
        "telefone": "(11) 91234-5678",
    },
    {
        "id": 3,
        "nome": "Dra. Maria Oliveira",
        "cro": "CRO-SP 67890",
        "especialidade": "Periodontia",
        "telefone": "(11) 99876-5432",
    },
]

REFERENCE_CLINICS = [
    {
        "id": "1",
        "nome": "Clínica Odontológica Sorriso Perfeito",
        "endereco": "Av. Paulista, 1000",
        "bairro": "Bela Vista",
        "cidade": "São Paulo",
        "telefone": "(11) 3456-7890",
        "avaliacao": 4.8,
        "convenios": ["Amil", "Bradesco Saúde", "SulAmérica"],
        "especialidades": ["Ortodontia", "Implantodontia", "Clínica Geral"],
    },
    {
        "id": "2",
        "nome": "Centro Odontológico Saúde Bucal",
        "endereco": "Rua Augusta, 1500",
        "bairro": "Consolação",
        "cidade": "São Paulo",
        "telefone": "(11) 3333-4444",
        "avaliacao": 4.5,
        "convenios": ["Unimed", "Porto Seguro", "Bradesco Saúde"],
        "especialidades": ["Endodontia", "Odontopediatria", "Clínica Geral"],
    },
    {
        "id": "3",
        "nome": "Odonto Excellence",
        "endereco": "Av. Brigadeiro Faria Lima, 2500",
        "bairro": "Itaim Bibi",
        "cidade": "São Paulo",
        "telefone": "(11) 9876-5432",
        "avaliacao": 4.9,
        "convenios": ["Amil", "Unimed", "SulAmérica", "Allianz"],
        "especialidades": ["Implantodontia", "Ortodontia", "Estética Dental"],
    },
    {
        "id": "4",
        "nome": "Clínica Dental Família",
        "endereco": "Rua Vergueiro, 1200",
        "bairro": "Vila Mariana",
        "cidade": "São Paulo",
        "telefone": "(11) 2222-3333",
        "avaliacao": 4.3,
        "convenios": ["Bradesco Saúde", "Porto Seguro"],
        "especialidades": ["Clínica Geral", "Odontopediatria", "Periodontia"],
    },
    {
        "id": "5",
        "nome": "Instituto Odontológico Avançado",
        "endereco": "Av. Rebouças, 3200",
        "bairro": "Pinheiros",
        "cidade": "São Paulo",
        "telefone": "(11) 4567-8901",
        "avaliacao": 4.7,
        "convenios": ["Amil", "SulAmérica", "Allianz"],
        "especialidades": ["Implantodontia", "Ortodontia", "Cirurgia Bucal"],
    },
]

# Sample alerts; notifications have no remote collection yet
SAMPLE_NOTIFICATIONS = [
    {
        "id": 1,
        "titulo": "Lembrete de Consulta",
        "descricao": (
            "Você tem uma consulta agendada para amanhã às 14:00 com a Dra. Ana Souza."
        ),
        "data": "2025-05-24T10:00:00",
        "lido": False,
    },
    {
        "id": 2,
        "titulo": "Promoção de Limpeza",
        "descricao": (
            "Aproveite nossa promoção de limpeza dental com 20% de desconto até o final do mês!"
        ),
        "data": "2025-05-20T08:30:00",
        "lido": True,
    },
    {
        "id": 3,
        "titulo": "Resultado de Exame",
        "descricao": (
            "Seus exames de radiografia estão prontos. "
            "Você pode acessá-los pelo portal do paciente."
        ),
        "data": "2025-05-18T16:45:00",
        "lido": False,
    },
]


def find_dentist(dentist_id: int) -> dict | None:
    """Look up a dentist in the provider table."""
    return next((dentist for dentist in DENTISTS if dentist["id"] == dentist_id), None)


def dentist_name(dentist_id: int) -> str:
    """Display name for a dentist id, with a placeholder for unknown ids."""
    dentist = find_dentist(dentist_id)
    return dentist["nome"] if dentist else f"Dentista ID: {dentist_id}"


CLINIC_FALLBACK = FallbackSource(
    name="reference_clinics",
    documents=[
        (clinic["id"], {key: value for key, value in clinic.items() if key != "id"})
        for clinic in REFERENCE_CLINICS
    ],
    policy=FallbackPolicy.ON_EMPTY_OR_ERROR,
)
