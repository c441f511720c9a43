"""
Perspicuus Enumerations

All enumeration types used by the scoring engine and the import pipeline.

All enums inherit from (str, Enum) for JSON serialization compatibility.
Values are the wire strings used in exported files, which are French for the
request vocabulary.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Risk Levels
# =============================================================================

class RiskLevel(str, Enum):
    """Four-tier classification of the total score."""
    FAIBLE = "FAIBLE"          # total <= 3
    MODERE = "MODERE"          # total <= 6
    ELEVE = "ELEVE"            # total <= 10
    TRES_ELEVE = "TRES_ELEVE"  # total > 10

    @property
    def label_fr(self) -> str:
        return _RISK_LEVEL_LABELS[self]


_RISK_LEVEL_LABELS = {
    RiskLevel.FAIBLE: "Faible",
    RiskLevel.MODERE: "Modéré",
    RiskLevel.ELEVE: "Élevé",
    RiskLevel.TRES_ELEVE: "Très élevé",
}


# =============================================================================
# Client
# =============================================================================

class ClientType(str, Enum):
    """Natural or legal person."""
    NATURAL_PERSON = "Personne physique"
    LEGAL_PERSON = "Personne morale"


class ClientCategory(str, Enum):
    """Questionnaire track the analyst followed. Informational only."""
    STANDARD = "Standard"
    NPO = "NPO"
    PEP = "PEP"
    SANCTIONS = "Sanctions"
    TRAVEL_RULE = "Travel Rule"
    WEALTH_MANAGEMENT = "Wealth Management"


# =============================================================================
# Transaction
# =============================================================================

class PaymentMethod(str, Enum):
    """Single payment method of the transaction pattern."""
    WIRE = "Virement bancaire"
    CHECK = "Chèque"
    CARD = "Carte bancaire"
    CASH = "Espèces"
    SPLIT = "Paiement fractionné"
    INTERNATIONAL_WIRE = "Virement international"
    CRYPTO = "Cryptomonnaies"


# =============================================================================
# Registry Tiers
# =============================================================================

class CountryTier(str, Enum):
    """Country risk tier from the registry."""
    VERY_HIGH = "very_high"  # FATF black list
    HIGH = "high"            # FATF grey list / EU high-risk third countries
    STANDARD = "standard"    # absent from both lists


class SectorTier(str, Enum):
    """Sector risk tier, checked in declaration order."""
    VERY_HIGH = "very_high"
    HIGH = "high"
    MODERATE = "moderate"


# =============================================================================
# Questionnaire Supplements
# =============================================================================

class ClientSegment(str, Enum):
    """Wealth management client segment."""
    AFFLUENT = "Particulier fortuné"
    HIGH_NET_WORTH = "Très haute fortune"
    ULTRA_HIGH_NET_WORTH = "Ultra haute fortune"
    ENTREPRENEUR = "Entrepreneur"
    EXECUTIVE = "Dirigeant d'entreprise"
    LIBERAL_PROFESSION = "Profession libérale"
    INSTITUTIONAL_INVESTOR = "Investisseur institutionnel"
    MULTIGENERATIONAL_FAMILY = "Famille multigénérationnelle"


class WealthSource(str, Enum):
    INHERITANCE = "Héritage familial"
    PROFESSIONAL_INCOME = "Revenus professionnels"
    REAL_ESTATE_GAINS = "Plus-values immobilières"
    BUSINESS_SALE = "Cession d'entreprise"
    FINANCIAL_INCOME = "Revenus financiers"
    COMMERCIAL_ACTIVITY = "Activités commerciales"
    EXCEPTIONAL_GAINS = "Gains exceptionnels"
    UNKNOWN = "Origine indéterminée"


class WealthManagementServiceType(str, Enum):
    DISCRETIONARY = "Gestion discrétionnaire"
    ADVISORY = "Conseil en investissement"
    GLOBAL_WEALTH = "Gestion de patrimoine globale"
    FAMILY_OFFICE = "Services de family office"
    STRUCTURING = "Structuration patrimoniale"
    SUCCESSION = "Planification successorale"
    TAX_OPTIMIZATION = "Optimisation fiscale"
    ALTERNATIVES = "Investissements alternatifs"


class InvestmentVehicleType(str, Enum):
    SECURITIES_ACCOUNT = "Compte-titres classique"
    PEA = "Plan d'Épargne en Actions"
    LIFE_INSURANCE = "Assurance-vie"
    MUTUAL_FUND = "SICAV/FCP"
    HEDGE_FUND = "Fonds spéculatifs"
    PRIVATE_EQUITY = "Capital investissement"
    REAL_ESTATE_FUND = "SCPI/OPCI"
    STRUCTURED_PRODUCT = "Produits structurés"
    CRYPTO_ASSETS = "Cryptoactifs"
    ART = "Art et collections"
    PRECIOUS_METALS = "Métaux précieux"
    HOLDING = "Sociétés holdings"


class NPOCategory(str, Enum):
    """Legal form of a non-profit organisation."""
    ASSOCIATION = "Association loi 1901"
    FOUNDATION = "Fondation"
    RELIGIOUS = "Organisation cultuelle"
    UNION = "Syndicat"
    POLITICAL_PARTY = "Parti politique"
    INTERNATIONAL = "Organisation internationale"
    OTHER = "Autre NPO"


class NPOActivityType(str, Enum):
    HUMANITARIAN = "Aide humanitaire"
    DEVELOPMENT = "Coopération et développement"
    EDUCATION = "Éducation et formation"
    HEALTH = "Santé et social"
    CULTURE = "Culture et sport"
    RIGHTS = "Défense des droits"
    ENVIRONMENT = "Protection de l'environnement"
    RESEARCH = "Recherche"
    RELIGIOUS = "Activité religieuse"
    FUNDRAISING = "Collecte de fonds"


class NPOFundingSource(str, Enum):
    PRIVATE_DONATIONS = "Dons privés"
    PUBLIC_GRANTS = "Subventions publiques"
    EU_FUNDS = "Fonds européens"
    INTERNATIONAL_BODIES = "Organismes internationaux"
    SELF_FINANCING = "Autofinancement"
    MEMBERSHIP_FEES = "Cotisations"
    COMMERCIAL_ACTIVITY = "Activités commerciales"
    BEQUESTS = "Legs et donations"


class PPECategory(str, Enum):
    """Politically exposed person category."""
    NATIONAL = "PEP_NATIONAL"
    FOREIGN = "PEP_ETRANGER"
    INTERNATIONAL_ORGANISATION = "ORGANISATION_INTERNATIONALE"


class PPEFunctionType(str, Enum):
    HEAD_OF_STATE = "Chef d'État ou de gouvernement"
    MINISTER = "Ministre ou haut responsable gouvernemental"
    PARLIAMENTARIAN = "Parlementaire"
    SUPREME_COURT_JUDGE = "Juge de cour suprême"
    PARTY_LEADER = "Dirigeant de parti politique majeur"
    SENIOR_OFFICER = "Général ou officier supérieur"
    STATE_COMPANY_BOARD = "Membre d'organe d'administration d'entreprise publique"
    INTERNATIONAL_ORGANISATION_HEAD = "Dirigeant d'organisation internationale"
    OTHER = "Autre fonction publique importante"
