"""Curated catalog of postgraduate computing programs in Recife.

Loaded once at import; immutable at runtime.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CourseLevel = Literal["pos-graduacao", "mestrado", "doutorado"]
CourseModality = Literal["presencial", "ead", "hibrido"]
CourseShift = Literal["matutino", "vespertino", "noturno", "flexivel"]

COURSE_LEVELS: tuple[str, ...] = ("pos-graduacao", "mestrado", "doutorado")
COURSE_MODALITIES: tuple[str, ...] = ("presencial", "ead", "hibrido")


class Course(BaseModel):
    """One catalog entry. ``mec_grade`` is 0-5 or None when unrated."""

    model_config = ConfigDict(frozen=True)

    id: str
    institution: str
    program: str
    level: CourseLevel
    modality: CourseModality
    shift: CourseShift
    area: str
    city: str
    state: str
    duration: str
    url: str
    mec_recognized: bool = True
    mec_grade: int | None = Field(default=None, ge=0, le=5)
    price: str | None = None
    description: str = ""
    tags: tuple[str, ...] = ()

    @property
    def is_recife(self) -> bool:
        return self.city.lower() == "recife"

    @property
    def has_scholarship(self) -> bool:
        return self.price is not None and "Bolsa" in self.price

    def searchable_text(self) -> str:
        """Lowercased institution/program/area/city/description/tags."""
        parts = [
            self.institution,
            self.program,
            self.area,
            self.city,
            self.description,
            *self.tags,
        ]
        return " ".join(parts).lower()


class CourseStats(BaseModel):
    total: int
    presencial: int
    ead: int
    hibrido: int
    mestrado: int
    pos_graduacao: int
    doutorado: int
    recife: int
    com_bolsa: int


_CIN_ACADEMIC_URL = "https://portal.cin.ufpe.br/pos-graduacao/stricto-sensu/programa-academico/"
_CIN_RESIDENCY_URL = "https://portal.cin.ufpe.br/pos-graduacao/especializacoes-2/residencia-2/"


def _recife_course(**fields: object) -> Course:
    defaults: dict[str, object] = {
        "modality": "presencial",
        "shift": "flexivel",
        "city": "Recife",
        "state": "PE",
    }
    return Course.model_validate({**defaults, **fields})


CATALOG: tuple[Course, ...] = (
    _recife_course(
        id="ufpe-mestrado-cc",
        institution="UFPE - Centro de Informática (CIn)",
        program="Mestrado Acadêmico em Ciência da Computação",
        level="mestrado",
        area="Ciência da Computação",
        duration="24 meses",
        url=_CIN_ACADEMIC_URL,
        mec_grade=5,
        price="Gratuito",
        description=(
            "Programa de pós-graduação stricto sensu do CIn/UFPE com conceito CAPES 7 "
            "(nota máxima). Linhas de pesquisa em engenharia de software, IA, sistemas "
            "distribuídos, redes e mais. Possibilidade de bolsa CAPES/CNPq. Gratuito por "
            "ser universidade federal."
        ),
        tags=("Gratuito", "CAPES 7", "Federal", "Bolsa", "Pesquisa"),
    ),
    _recife_course(
        id="ufpe-mestrado-ec",
        institution="UFPE - Centro de Informática (CIn)",
        program="Mestrado Acadêmico em Engenharia da Computação",
        level="mestrado",
        area="Engenharia da Computação",
        duration="24 meses",
        url=_CIN_ACADEMIC_URL,
        mec_grade=5,
        price="Gratuito",
        description=(
            "Mestrado acadêmico em Engenharia da Computação no CIn/UFPE. Foco em sistemas "
            "embarcados, redes, computação em nuvem e engenharia de software. Conceito "
            "CAPES 7. Possibilidade de bolsa. Gratuito."
        ),
        tags=("Gratuito", "CAPES 7", "Federal", "Bolsa", "Engenharia"),
    ),
    _recife_course(
        id="ufpe-mestrado-prof",
        institution="UFPE - Centro de Informática (CIn)",
        program="Mestrado Profissional em Ciência da Computação",
        level="mestrado",
        area="Ciência da Computação",
        duration="24 meses",
        url="https://portal.cin.ufpe.br/pos-graduacao/stricto-sensu/programa-profissional/",
        mec_grade=5,
        price="Gratuito",
        description=(
            "Mestrado profissional stricto sensu do CIn/UFPE voltado a profissionais do "
            "mercado. Foco em pesquisa aplicada em engenharia de software, IA e sistemas. "
            "Gratuito por ser universidade federal pública."
        ),
        tags=("Gratuito", "Federal", "Profissional", "Pesquisa Aplicada"),
    ),
    _recife_course(
        id="ufpe-doutorado",
        institution="UFPE - Centro de Informática (CIn)",
        program="Doutorado em Ciência da Computação",
        level="doutorado",
        area="Ciência da Computação",
        duration="48 meses",
        url=_CIN_ACADEMIC_URL,
        mec_grade=5,
        price="Gratuito",
        description=(
            "Doutorado acadêmico do CIn/UFPE com conceito CAPES 7 (nota máxima no Brasil). "
            "Pesquisa de ponta em engenharia de software, inteligência artificial, "
            "segurança e mais. Possibilidade de bolsa CAPES/CNPq. Gratuito."
        ),
        tags=("Gratuito", "CAPES 7", "Federal", "Bolsa", "Doutorado"),
    ),
    _recife_course(
        id="ufpe-residencia-software",
        institution="UFPE - CIn (parceria Motorola)",
        program="Residência em Software",
        level="pos-graduacao",
        area="Engenharia de Software / Testes",
        duration="12 meses",
        url=_CIN_RESIDENCY_URL,
        mec_grade=5,
        price="Gratuito + Bolsa",
        description=(
            "Modelo pioneiro de residência em software criado no CIn/UFPE em parceria com "
            "a Motorola. Imersão em ambiente acadêmico e fábrica de software/teste. Foco "
            "em planejamento, automação e execução de testes em aplicações mobile. "
            "Gratuito com possibilidade de bolsa de pesquisa."
        ),
        tags=("Gratuito", "Bolsa", "Residência", "Testes", "Mobile"),
    ),
    _recife_course(
        id="ufpe-residencia-dev",
        institution="UFPE - CIn (parceria Emprel)",
        program="Residência em Desenvolvimento de Software",
        level="pos-graduacao",
        area="Desenvolvimento de Software",
        duration="12 meses",
        url=_CIN_RESIDENCY_URL,
        mec_grade=5,
        price="Gratuito + Bolsa",
        description=(
            "Programa de residência em desenvolvimento de software do CIn/UFPE em parceria "
            "com a Emprel. Objetivo de formar recursos humanos com alto grau de "
            "especialização em desenvolvimento de software. Gratuito com bolsa."
        ),
        tags=("Gratuito", "Bolsa", "Residência", "Dev", "Software"),
    ),
    _recife_course(
        id="ufpe-residencia-robotica",
        institution="UFPE - CIn (parceria Softex)",
        program="Residência em Robótica e IA Aplicadas a Testes de Software",
        level="pos-graduacao",
        area="IA / Testes de Software",
        duration="12 meses",
        url="https://residenciarobotica.cin.ufpe.br/",
        mec_grade=5,
        price="Gratuito + Bolsa",
        description=(
            "Residência do CIn/UFPE em parceria com Softex. Laboratórios equipados com "
            "robôs e materiais para prototipação. Foco em testes práticos, IA e "
            "desenvolvimento de software com impacto social. Gratuito com bolsa."
        ),
        tags=("Gratuito", "Bolsa", "IA", "Robótica", "Testes"),
    ),
    _recife_course(
        id="ufpe-residencia-dados",
        institution="UFPE - CIn (parceria Samsung)",
        program="Residência em Engenharia e Ciência de Dados",
        level="pos-graduacao",
        area="Ciência de Dados",
        duration="12 meses",
        url=_CIN_RESIDENCY_URL,
        mec_grade=5,
        price="Gratuito + Bolsa",
        description=(
            "Residência do CIn/UFPE em parceria com a Samsung (19 anos de parceria). "
            "Vivência em ambiente empresarial com base teórica de excelência em "
            "engenharia e ciência de dados. Gratuito com bolsa."
        ),
        tags=("Gratuito", "Bolsa", "Dados", "Samsung", "Residência"),
    ),
    _recife_course(
        id="ufpe-residencia-visao",
        institution="UFPE - CIn (parceria Samsung)",
        program="Residência em Visão Computacional",
        level="pos-graduacao",
        area="Visão Computacional / IA",
        duration="12 meses",
        url=_CIN_RESIDENCY_URL,
        mec_grade=5,
        price="Gratuito + Bolsa",
        description=(
            "Residência do CIn/UFPE em parceria com a Samsung. Capacitação em conceitos "
            "alinhados às demandas atuais do mercado de tecnologia. Foco em visão "
            "computacional e processamento de imagens. Gratuito com bolsa."
        ),
        tags=("Gratuito", "Bolsa", "Visão Computacional", "IA", "Samsung"),
    ),
    _recife_course(
        id="ufpe-residencia-auto-dev",
        institution="UFPE - CIn (parceria Stellantis)",
        program="Residência em Desenvolvimento de Software para Setor Automotivo",
        level="pos-graduacao",
        area="Engenharia de Software Automotivo",
        duration="12 meses",
        url=_CIN_RESIDENCY_URL,
        mec_grade=5,
        price="Gratuito + Bolsa",
        description=(
            "Residência do CIn/UFPE em parceria com a Stellantis. Formação para aprimorar "
            "habilidades em desenvolvimento de software com aprendizado direcionado por "
            "profissionais experientes. Gratuito com bolsa de pesquisa."
        ),
        tags=("Gratuito", "Bolsa", "Automotivo", "Stellantis", "Dev"),
    ),
    _recife_course(
        id="ufrpe-mestrado",
        institution="UFRPE - Universidade Federal Rural de Pernambuco",
        program="Mestrado em Informática Aplicada",
        level="mestrado",
        area="Informática Aplicada",
        duration="24 meses",
        url="http://www.ppgia.ufrpe.br/",
        mec_grade=4,
        price="Gratuito",
        description=(
            "Mestrado acadêmico em Informática Aplicada na UFRPE. Linhas de pesquisa em "
            "engenharia de software, inteligência computacional e sistemas de informação. "
            "Possibilidade de bolsa CAPES/CNPq. Gratuito por ser universidade federal."
        ),
        tags=("Gratuito", "Federal", "Bolsa", "Pesquisa", "CAPES"),
    ),
    _recife_course(
        id="upe-mestrado",
        institution="Universidade de Pernambuco (UPE)",
        program="Mestrado em Engenharia da Computação",
        level="mestrado",
        area="Engenharia da Computação",
        duration="24 meses",
        url="http://www.ppgec.ecomp.poli.br/",
        mec_grade=4,
        price="Gratuito",
        description=(
            "Mestrado acadêmico em Engenharia da Computação na UPE/Poli. Linhas de pesquisa "
            "em engenharia de software, computação inteligente e sistemas distribuídos. "
            "Possibilidade de bolsa. Gratuito por ser universidade estadual pública."
        ),
        tags=("Gratuito", "Estadual", "Bolsa", "Pesquisa", "CAPES"),
    ),
    _recife_course(
        id="ifpe-pos-ti",
        institution="IFPE - Instituto Federal de Pernambuco",
        program="Especialização em Tecnologia da Informação",
        level="pos-graduacao",
        shift="noturno",
        area="Tecnologia da Informação",
        duration="18 meses",
        url="https://portal.ifpe.edu.br/o-ifpe/pesquisa-pos-graduacao-e-inovacao/pos-graduacao/",
        mec_grade=4,
        price="Gratuito",
        description=(
            "Pós-graduação lato sensu gratuita no IFPE campus Recife. Formação "
            "especializada em TI com foco em demandas do mercado local e regional. "
            "Gratuito por ser instituto federal público."
        ),
        tags=("Gratuito", "Federal", "Instituto Federal", "TI"),
    ),
)
