"""
app/catalog/curated.py

Read-only curated dataset: category keys mapped to ordered company lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class CuratedCompany:
    name: str
    domain: str


@dataclass(frozen=True)
class CategoryMeta:
    title: str
    description: str


def _companies(*pairs: tuple[str, str]) -> tuple[CuratedCompany, ...]:
    return tuple(CuratedCompany(name=name, domain=domain) for name, domain in pairs)


CATEGORY_META = MappingProxyType(
    {
        "ai": CategoryMeta(
            title="AI & Artificial Intelligence Company Logos",
            description="Logos from top AI companies including OpenAI, Anthropic, Midjourney and more.",
        ),
        "saas": CategoryMeta(
            title="SaaS Company Logos",
            description="Logos from leading SaaS companies including Salesforce, HubSpot, Slack and Zoom.",
        ),
        "fintech": CategoryMeta(
            title="Fintech & Financial Technology Logos",
            description="Logos from top fintech companies including Stripe, PayPal, Square and Coinbase.",
        ),
        "social": CategoryMeta(
            title="Social Media & Network Logos",
            description="Logos from social platforms including Facebook, Instagram, TikTok, X and LinkedIn.",
        ),
        "crypto": CategoryMeta(
            title="Crypto & Blockchain Company Logos",
            description="Logos from crypto and blockchain companies including Bitcoin, Ethereum and Binance.",
        ),
        "shop": CategoryMeta(
            title="E-Commerce & Retail Brand Logos",
            description="Logos from e-commerce and retail brands including Amazon, Nike, Shopify and Target.",
        ),
    }
)

CURATED_CATEGORIES: MappingProxyType[str, tuple[CuratedCompany, ...]] = MappingProxyType(
    {
        "ai": _companies(
            ("OpenAI", "openai.com"),
            ("Anthropic", "anthropic.com"),
            ("Google DeepMind", "deepmind.com"),
            ("Midjourney", "midjourney.com"),
            ("Hugging Face", "huggingface.co"),
            ("Mistral AI", "mistral.ai"),
            ("Cohere", "cohere.com"),
            ("Stability AI", "stability.ai"),
            ("Perplexity", "perplexity.ai"),
            ("Runway", "runwayml.com"),
            ("Scale AI", "scale.com"),
            ("Nvidia", "nvidia.com"),
        ),
        "saas": _companies(
            ("Salesforce", "salesforce.com"),
            ("HubSpot", "hubspot.com"),
            ("Slack", "slack.com"),
            ("Zoom", "zoom.us"),
            ("Notion", "notion.so"),
            ("Atlassian", "atlassian.com"),
            ("Figma", "figma.com"),
            ("Dropbox", "dropbox.com"),
            ("Asana", "asana.com"),
            ("Zendesk", "zendesk.com"),
            ("Airtable", "airtable.com"),
            ("Canva", "canva.com"),
        ),
        "fintech": _companies(
            ("Stripe", "stripe.com"),
            ("PayPal", "paypal.com"),
            ("Square", "squareup.com"),
            ("Coinbase", "coinbase.com"),
            ("Revolut", "revolut.com"),
            ("Wise", "wise.com"),
            ("Klarna", "klarna.com"),
            ("Robinhood", "robinhood.com"),
            ("Plaid", "plaid.com"),
            ("Chime", "chime.com"),
            ("Adyen", "adyen.com"),
            ("Brex", "brex.com"),
        ),
        "social": _companies(
            ("Facebook", "facebook.com"),
            ("Instagram", "instagram.com"),
            ("TikTok", "tiktok.com"),
            ("X", "x.com"),
            ("LinkedIn", "linkedin.com"),
            ("YouTube", "youtube.com"),
            ("Snapchat", "snapchat.com"),
            ("Pinterest", "pinterest.com"),
            ("Reddit", "reddit.com"),
            ("Discord", "discord.com"),
            ("Telegram", "telegram.org"),
            ("WhatsApp", "whatsapp.com"),
        ),
        "crypto": _companies(
            ("Bitcoin", "bitcoin.org"),
            ("Ethereum", "ethereum.org"),
            ("Binance", "binance.com"),
            ("Coinbase", "coinbase.com"),
            ("Kraken", "kraken.com"),
            ("Solana", "solana.com"),
            ("Ripple", "ripple.com"),
            ("Chainlink", "chain.link"),
            ("Polygon", "polygon.technology"),
            ("Uniswap", "uniswap.org"),
            ("MetaMask", "metamask.io"),
            ("Ledger", "ledger.com"),
        ),
        "shop": _companies(
            ("Amazon", "amazon.com"),
            ("Nike", "nike.com"),
            ("Shopify", "shopify.com"),
            ("Target", "target.com"),
            ("Walmart", "walmart.com"),
            ("eBay", "ebay.com"),
            ("Etsy", "etsy.com"),
            ("IKEA", "ikea.com"),
            ("Adidas", "adidas.com"),
            ("Zara", "zara.com"),
            ("Best Buy", "bestbuy.com"),
            ("AliExpress", "aliexpress.com"),
        ),
    }
)

TOP_COMPANIES: tuple[CuratedCompany, ...] = _companies(
    ("Google", "google.com"),
    ("Apple", "apple.com"),
    ("Microsoft", "microsoft.com"),
    ("Amazon", "amazon.com"),
    ("Meta", "meta.com"),
    ("Netflix", "netflix.com"),
    ("Tesla", "tesla.com"),
    ("Nvidia", "nvidia.com"),
    ("OpenAI", "openai.com"),
    ("Spotify", "spotify.com"),
    ("Adobe", "adobe.com"),
    ("Samsung", "samsung.com"),
    ("Stripe", "stripe.com"),
    ("Airbnb", "airbnb.com"),
    ("Uber", "uber.com"),
    ("Salesforce", "salesforce.com"),
    ("Shopify", "shopify.com"),
    ("Slack", "slack.com"),
    ("Zoom", "zoom.us"),
    ("Nike", "nike.com"),
    ("Coca-Cola", "coca-cola.com"),
    ("Intel", "intel.com"),
    ("IBM", "ibm.com"),
    ("Oracle", "oracle.com"),
    ("PayPal", "paypal.com"),
    ("LinkedIn", "linkedin.com"),
    ("YouTube", "youtube.com"),
    ("Instagram", "instagram.com"),
    ("Dropbox", "dropbox.com"),
    ("GitHub", "github.com"),
)


def get_category(key: str | None) -> tuple[CuratedCompany, ...] | None:
    """Case-insensitive category lookup; None for blank or unknown keys."""
    if not key:
        return None
    return CURATED_CATEGORIES.get(key.strip().lower())


def domain_slug(domain: str) -> str:
    return domain.replace(".", "-").lower()


def find_by_slug(slug: str) -> tuple[CuratedCompany, str] | None:
    """
    Return the curated company and its category for a logo detail slug.
    """

    normalized = slug.strip().lower()
    for category, companies in CURATED_CATEGORIES.items():
        for company in companies:
            if domain_slug(company.domain) == normalized:
                return company, category
    return None


def related_companies(category: str, exclude_domain: str, *, limit: int = 8) -> list[CuratedCompany]:
    companies = CURATED_CATEGORIES.get(category, ())
    return [company for company in companies if company.domain != exclude_domain][:limit]
