"""Prompt templates for every generator call.

Each public function returns the complete prompt text for one Gemini request.
Structured requests end with a JSON example so the model's answer lines up
with the response schema passed alongside the prompt; plain-text requests
(heritage stories and artist statements) do not.

The wording is copy, not logic: tune it freely, but keep the JSON keys in
step with the result models in :mod:`craftai.core.generator`.
"""

from __future__ import annotations

from textwrap import dedent


def _render(template: str, **values: str) -> str:
    return dedent(template).strip().format(**values)


_STORY_TEMPLATE = """
    Create a compelling narrative story for a {craft_type} artisan.

    Focus area: {focus}

    Generate a story that:
    - Highlights the cultural heritage and traditional techniques
    - Shows the artisan's passion and dedication
    - Appeals to customers who value authentic craftsmanship
    - Is engaging and emotionally resonant
    - Is 2-3 paragraphs long

    Respond with JSON in this format:
    {{
        "title": "An engaging title for the story",
        "content": "The complete story content"
    }}
"""

_IMAGE_TEMPLATE = """
    Analyze this artisan product image and generate:
    1. A detailed description of the item, its craftsmanship, and visual appeal
    2. Compelling marketing copy that would attract customers to purchase this handmade item

    Focus on:
    - The quality and uniqueness of the craftsmanship
    - Materials and techniques visible in the image
    - Emotional appeal and storytelling elements
    - Value proposition for potential buyers

    Respond with JSON in this format:
    {{
        "description": "Detailed description of the item and its craftsmanship",
        "marketing_copy": "Compelling marketing copy for selling this item"
    }}
"""

_SOCIAL_TEMPLATE = """
    Optimize this social media content for {platform}:

    Content: {content}
    Craft Type: {craft_type}

    Create optimized content that:
    - Is tailored for {platform}'s audience and format
    - Includes relevant hashtags for maximum reach
    - Has an engaging caption that drives engagement
    - Appeals to people interested in handmade/artisan products
    - Follows {platform} best practices

    Respond with JSON in this format:
    {{
        "optimized_content": "The optimized content",
        "hashtags": ["hashtag1", "hashtag2", "hashtag3"],
        "caption": "An engaging caption for the post"
    }}
"""

_PRODUCT_TEMPLATE = """
    Optimize this product listing for {platform}:

    Product Name: {product_name}
    Description: {description}
    Platform: {platform}

    Create an optimized listing that:
    - Has an SEO-friendly title that will rank well on {platform}
    - Includes relevant keywords for search visibility
    - Appeals to customers looking for handmade/artisan products
    - Follows {platform}'s listing best practices
    - Highlights the unique value and craftsmanship

    Respond with JSON in this format:
    {{
        "optimized_title": "SEO-optimized product title",
        "optimized_description": "Compelling product description",
        "keywords": ["keyword1", "keyword2", "keyword3"]
    }}
"""

_HERITAGE_TEMPLATE = """
    Create a detailed heritage story about this traditional craft technique:

    Technique/Tradition: {technique}
    Cultural Context: {cultural_context}

    Generate a story that:
    - Explains the historical significance and origins
    - Describes the traditional techniques and methods
    - Highlights the cultural importance and meaning
    - Shows how this tradition is being preserved today
    - Is educational yet engaging for modern audiences
    - Is 2-3 paragraphs long

    Focus on authenticity and respect for the cultural heritage.
"""

_STATEMENT_HEADER = """
    Create a professional artist statement based on this information:
"""

_STATEMENT_BODY = """
    Generate an artist statement that:
    - Is professional and compelling
    - Reflects the artist's unique voice and perspective
    - Explains their artistic process and approach
    - Connects their personal journey to their craft
    - Appeals to collectors, galleries, and art enthusiasts
    - Is concise but meaningful (2-3 paragraphs)

    The statement should be suitable for portfolios, exhibitions, and professional presentations.
"""

_MARKET_TEMPLATE = """
    Analyze current market trends for {craft_type} products:

    Provide insights on:
    - Current demand trends and growth patterns
    - Average pricing for handmade {craft_type} items
    - Trending keywords and search terms
    - Market opportunities for artisans

    Base your analysis on general market knowledge and trends in the handmade/artisan marketplace.

    Respond with JSON in this format:
    {{
        "demandIncrease": 25,
        "avgPrice": 45,
        "keywords": ["sustainable", "handmade", "artisan"]
    }}
"""


def story_prompt(craft_type: str, focus: str) -> str:
    return _render(_STORY_TEMPLATE, craft_type=craft_type, focus=focus)


def image_analysis_prompt() -> str:
    return _render(_IMAGE_TEMPLATE)


def social_prompt(platform: str, content: str, craft_type: str) -> str:
    return _render(_SOCIAL_TEMPLATE, platform=platform, content=content, craft_type=craft_type)


def product_listing_prompt(product_name: str, platform: str, description: str) -> str:
    return _render(
        _PRODUCT_TEMPLATE,
        product_name=product_name,
        platform=platform,
        description=description,
    )


def heritage_prompt(technique: str, cultural_context: str) -> str:
    return _render(_HERITAGE_TEMPLATE, technique=technique, cultural_context=cultural_context)


def artist_statement_prompt(
    artist_journey: str,
    inspiration: str | None = None,
    philosophy: str | None = None,
) -> str:
    """Build the artist-statement prompt.

    The Inspiration and Philosophy lines are only included when a non-blank
    value is supplied.
    """
    details = [f"Artist Journey: {artist_journey}"]
    if inspiration and inspiration.strip():
        details.append(f"Inspiration: {inspiration}")
    if philosophy and philosophy.strip():
        details.append(f"Philosophy: {philosophy}")

    sections = [
        dedent(_STATEMENT_HEADER).strip(),
        "\n".join(details),
        dedent(_STATEMENT_BODY).strip(),
    ]
    return "\n\n".join(sections)


def market_trends_prompt(craft_type: str) -> str:
    return _render(_MARKET_TEMPLATE, craft_type=craft_type)
