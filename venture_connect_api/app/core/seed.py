"""
Sample data for local development and demos.

``seed_store`` inserts six users (three investors followed by three
entrepreneurs, so a fresh store assigns them ids 1 to 6), two
collaboration requests and a short conversation.  The request and
message rows refer to users by those ids.  Seeding is skipped when the
store already holds users.
"""

import logging
from typing import Any, Dict, List

from ..storage.base import Store
from .security import hash_password

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = "password123"

SAMPLE_USERS: List[Dict[str, Any]] = [
    {
        "email": "michael.rodriguez@example.com",
        "first_name": "Michael",
        "last_name": "Rodriguez",
        "role": "investor",
        "avatar": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150",
        "bio": "Experienced venture capitalist with 15+ years in tech investments. Focus on B2B SaaS and fintech startups.",
        "company": "Rodriguez Capital",
        "title": "Senior Partner",
        "location": "San Francisco, CA",
        "website": "www.michaelrodriguez.vc",
        "linkedin": "michael-rodriguez-vc",
        "industries": ["FinTech", "SaaS", "B2B"],
        "investment_range": "$2M - $10M",
        "portfolio_size": 32,
    },
    {
        "email": "sarah.kim@example.com",
        "first_name": "Sarah",
        "last_name": "Kim",
        "role": "investor",
        "avatar": "https://images.unsplash.com/photo-1494790108755-2616b612b5c5?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150",
        "bio": "Focus on healthcare and biotech innovations. Active mentor for early-stage companies.",
        "company": "Angel Network",
        "title": "Managing Director",
        "location": "Boston, MA",
        "linkedin": "sarah-kim-angel",
        "industries": ["Healthcare", "Biotech"],
        "investment_range": "$500K - $5M",
        "portfolio_size": 18,
    },
    {
        "email": "david.chang@example.com",
        "first_name": "David",
        "last_name": "Chang",
        "role": "investor",
        "avatar": "https://images.unsplash.com/photo-1560250097-0b93528c311a?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150",
        "bio": "Invests in consumer tech and e-commerce platforms. Portfolio includes 15+ successful exits.",
        "company": "Chang Ventures",
        "title": "Founder & Managing Partner",
        "location": "Los Angeles, CA",
        "website": "www.changventures.com",
        "linkedin": "david-chang-ventures",
        "industries": ["E-commerce", "Consumer Tech"],
        "investment_range": "$1M - $15M",
        "portfolio_size": 25,
    },
    {
        "email": "alex.chen@example.com",
        "first_name": "Alex",
        "last_name": "Chen",
        "role": "entrepreneur",
        "avatar": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150",
        "bio": "Building the next generation of fintech solutions for small businesses. Former Goldman Sachs analyst with deep expertise in financial services.",
        "company": "PayFlow Solutions",
        "title": "CEO & Founder",
        "location": "San Francisco, CA",
        "website": "www.payflowsolutions.com",
        "linkedin": "alex-chen-payflow",
        "industries": ["FinTech", "B2B"],
        "funding_need": "$5M Series A",
    },
    {
        "email": "lisa.park@example.com",
        "first_name": "Lisa",
        "last_name": "Park",
        "role": "entrepreneur",
        "avatar": "https://images.unsplash.com/photo-1573496359142-b8d87734a5a2?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150",
        "bio": "Revolutionizing healthcare with AI-powered diagnostic tools. MD from Harvard with 10+ years in medical research.",
        "company": "MedAI Diagnostics",
        "title": "Founder & CTO",
        "location": "Boston, MA",
        "website": "www.medai-diagnostics.com",
        "linkedin": "lisa-park-medai",
        "industries": ["Healthcare", "AI", "Biotech"],
        "funding_need": "$3M Seed",
    },
    {
        "email": "marcus.johnson@example.com",
        "first_name": "Marcus",
        "last_name": "Johnson",
        "role": "entrepreneur",
        "avatar": "https://images.unsplash.com/photo-1506794778202-cad84cf45f62?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150",
        "bio": "Creating sustainable e-commerce solutions that reduce environmental impact. Former Amazon product manager.",
        "company": "EcoCommerce",
        "title": "CEO",
        "location": "Seattle, WA",
        "website": "www.ecocommerce.io",
        "linkedin": "marcus-johnson-eco",
        "industries": ["E-commerce", "Sustainability"],
        "funding_need": "$8M Series A",
    },
]

SAMPLE_REQUESTS: List[Dict[str, Any]] = [
    {
        "from_user_id": 1,
        "to_user_id": 4,
        "message": "Interested in discussing your fintech solution. I have experience investing in similar B2B payment platforms.",
        "status": "pending",
    },
    {
        "from_user_id": 2,
        "to_user_id": 5,
        "message": "Your AI diagnostic platform aligns perfectly with our healthcare investment thesis. Would love to connect.",
        "status": "accepted",
    },
]

SAMPLE_MESSAGES: List[Dict[str, Any]] = [
    {
        "from_user_id": 2,
        "to_user_id": 5,
        "content": "Hi Lisa, thanks for accepting my collaboration request. I'd love to learn more about your AI diagnostic platform.",
    },
    {
        "from_user_id": 5,
        "to_user_id": 2,
        "content": "Hi Sarah, great to connect! Our platform uses machine learning to analyze medical imaging with 95% accuracy. Would you be available for a call this week?",
    },
    {
        "from_user_id": 2,
        "to_user_id": 5,
        "content": "That sounds very promising! I'm available Tuesday or Thursday afternoon. Should we schedule a 30-minute introductory call?",
    },
]


def seed_store(store: Store, password: str = SAMPLE_PASSWORD) -> bool:
    """Insert the sample data.  Returns False if the store was not empty."""
    if store.count_users():
        logger.info("Store already has users, skipping seed")
        return False

    logger.info("Seeding store with sample data...")
    for user in SAMPLE_USERS:
        store.create_user({**user, "password": hash_password(password)})
    logger.info("Inserted %d sample users", len(SAMPLE_USERS))

    for request in SAMPLE_REQUESTS:
        store.create_collaboration_request(request)
    logger.info("Inserted %d sample collaboration requests", len(SAMPLE_REQUESTS))

    for message in SAMPLE_MESSAGES:
        store.create_message(message)
    logger.info("Inserted %d sample messages", len(SAMPLE_MESSAGES))
    return True
