"""Static proposal copy: service descriptions, scopes and timeline."""

from __future__ import annotations

from dataclasses import dataclass

from .models import Agent, Template, validate_agent, validate_template


@dataclass(frozen=True)
class ServiceDescription:
    title: str
    badge: str
    short_description: str
    description: str


@dataclass(frozen=True)
class ServiceScope:
    """Title, description and deliverables for one agent's scope section."""

    title: str
    description: str
    deliverables: tuple[str, ...]


SERVICE_DESCRIPTIONS: dict[str, ServiceDescription] = {
    "seo": ServiceDescription(
        title="SEO & GEO Agent",
        badge="SEO",
        short_description="Dominate search results with AI-powered SEO and GEO strategies",
        description=(
            "Our SEO & GEO Agent leverages cutting-edge AI technology to optimize your digital "
            "presence across search engines and local geo-locations, driving qualified traffic "
            "and improving your online visibility."
        ),
    ),
    "paid_ads": ServiceDescription(
        title="Paid Ads Agent",
        badge="PAID ADS",
        short_description="Maximize ROI with intelligent paid advertising automation",
        description=(
            "AI-driven paid advertising campaigns designed to optimize performance and maximize "
            "your return on investment across all major platforms."
        ),
    ),
    "website": ServiceDescription(
        title="Website Agent",
        badge="WEBSITE",
        short_description="Custom AI-optimized websites built for conversion",
        description=(
            "Professional website development with AI optimization, designed for maximum "
            "conversion and seamless integration with your marketing ecosystem."
        ),
    ),
}

COMBO_SHORT_DESCRIPTION = (
    "AI-powered SEO, GEO optimization, and intelligent paid advertising, bundled for maximum impact."
)

_SEO_DELIVERABLES = (
    "20-25 SEO-optimized blog posts per month",
    "Comprehensive technical SEO audits",
    "AI LLM & GEO placement optimization",
    "Strategic link building campaigns",
    "Conversion rate optimization",
    "Local search optimization",
    "Keyword research and strategy",
    "Performance monitoring and reporting",
)

_PAID_ADS_LEADS_DELIVERABLES = (
    "CPQL (Cost Per Qualified Lead) optimization",
    "CRM integration and lead tracking",
    "Lead scoring and quality assessment solutions",
    "Landing page A/B testing and optimization",
    "Advanced retargeting and remarketing campaigns",
    "Multi-platform campaign management",
    "Real-time performance monitoring",
    "Monthly strategy reviews and optimizations",
)

_PAID_ADS_ECOM_DELIVERABLES = (
    "ROAS & CAC optimization strategies",
    "Product feed setup and catalog integration",
    "Shopping & Dynamic ads implementation",
    "Cart abandonment retargeting campaigns",
    "Purchase event tracking and optimization",
    "Multi-channel campaign coordination",
    "Revenue attribution modeling",
    "Monthly performance analysis and reporting",
)

_WEBSITE_DELIVERABLES = (
    "Custom website design and development",
    "SEO & Ads ready setup and optimization",
    "Comprehensive analytics dashboard",
    "Unlimited changes with 2-day turnaround",
    "Secure hosting and SSL certification",
    "GDPR and compliance management",
    "Mobile-responsive design",
    "Performance optimization and monitoring",
)


def get_service_scope(agent: Agent, template: Template) -> ServiceScope:
    """Return the scope section copy for one agent under one template."""
    validate_agent(agent)
    validate_template(template)
    service = SERVICE_DESCRIPTIONS[agent]
    if agent == "seo":
        deliverables = _SEO_DELIVERABLES
    elif agent == "paid_ads":
        deliverables = _PAID_ADS_LEADS_DELIVERABLES if template == "leads" else _PAID_ADS_ECOM_DELIVERABLES
    else:
        deliverables = _WEBSITE_DELIVERABLES
    return ServiceScope(title=service.title, description=service.description, deliverables=deliverables)


EXECUTIVE_SUMMARY_CONTENT: dict[str, str] = {
    "leads": (
        "This proposal outlines a comprehensive AI-driven marketing strategy designed to generate "
        "high-quality leads for your business. Our approach combines cutting-edge SEO, intelligent "
        "paid advertising, and conversion optimization to create a powerful lead generation engine "
        "that delivers measurable results and sustainable growth."
    ),
    "ecom": (
        "This proposal presents a complete AI-powered eCommerce marketing solution designed to "
        "maximize your online revenue and customer acquisition. Through advanced SEO strategies, "
        "targeted paid advertising, and conversion optimization, we'll create a comprehensive "
        "system that drives sales and builds lasting customer relationships."
    ),
}

IMPLEMENTATION_TIMELINE: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Day 0-30",
        (
            "Initial account setup and configuration",
            "Comprehensive audit of current digital presence",
            "Strategic planning and goal setting",
            "Campaign architecture development",
            "Initial content creation and optimization",
        ),
    ),
    (
        "Day 31-60",
        (
            "Full campaign launch and monitoring",
            "A/B testing implementation and analysis",
            "Performance optimization based on initial data",
            "Audience refinement and targeting adjustments",
            "First month performance review and strategy refinement",
        ),
    ),
    (
        "Day 61-90",
        (
            "Advanced optimization and scaling strategies",
            "Custom automation implementation",
            "Performance benchmarking and goal assessment",
            "Quarterly strategy review and planning",
            "ROI analysis and future recommendations",
        ),
    ),
    (
        "Ongoing",
        (
            "Continuous monitoring and optimization",
            "Monthly performance reviews and reports",
            "Proactive strategy adjustments",
            "New opportunity identification",
            "24/7 account management and support",
        ),
    ),
)

WHY_MEGA: tuple[tuple[str, str], ...] = (
    (
        "AI-Powered",
        "Our proprietary AI agents work 24/7, continuously optimizing your campaigns and content "
        "for maximum performance.",
    ),
    (
        "Dedicated Team",
        "Every client gets a dedicated account manager and direct access to specialists. No call "
        "centers, no runaround.",
    ),
    (
        "Results-Driven",
        "We optimize for business outcomes, not vanity metrics. Every dollar in your budget is "
        "working toward qualified leads and revenue.",
    ),
)
