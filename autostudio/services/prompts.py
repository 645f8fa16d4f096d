"""
AutoStudio - Prompts & Response Schemas
Prompt builders and structured-output schemas for every AI intent
"""

COMPETITION = ['Low', 'Medium', 'High']

TREND_SCHEMA = {
    'type': 'ARRAY',
    'items': {
        'type': 'OBJECT',
        'properties': {
            'topic': {'type': 'STRING'},
            'volume': {'type': 'STRING'},
            'category': {'type': 'STRING'},
            'rising': {'type': 'BOOLEAN'},
            'searchIntent': {'type': 'STRING'},
            'trendType': {'type': 'STRING', 'enum': ['Daily', 'Realtime', 'Breakout', 'Rising']},
            'timePeriod': {'type': 'STRING'},
            'region': {'type': 'STRING'},
            'competition': {'type': 'STRING', 'enum': COMPETITION}
        },
        'required': ['topic', 'volume', 'category', 'rising', 'searchIntent',
                     'trendType', 'timePeriod', 'region', 'competition']
    }
}

KEYWORD_SCHEMA = {
    'type': 'ARRAY',
    'items': {
        'type': 'OBJECT',
        'properties': {
            'phrase': {'type': 'STRING'},
            'volume': {'type': 'STRING', 'description': 'Estimated monthly search volume (e.g. 1.2K, 500)'},
            'competition': {'type': 'STRING', 'enum': COMPETITION},
            'intent': {'type': 'STRING', 'enum': ['Informational', 'Commercial', 'Transactional']},
            'type': {'type': 'STRING', 'enum': ['Long-tail', 'Question', 'Seed']}
        },
        'required': ['phrase', 'volume', 'competition', 'intent', 'type']
    }
}

SUGGESTION_SCHEMA = {
    'type': 'ARRAY',
    'items': {
        'type': 'OBJECT',
        'properties': {
            'topic': {'type': 'STRING'},
            'reason': {'type': 'STRING'},
            'potential': {'type': 'STRING'},
            'keywords': {
                'type': 'ARRAY',
                'items': {'type': 'STRING'},
                'description': 'Associated high-value keywords'
            }
        },
        'required': ['topic', 'reason', 'potential', 'keywords']
    }
}

ARTICLE_SCHEMA = {
    'type': 'OBJECT',
    'properties': {
        'title': {'type': 'STRING', 'description': 'Main Article Title'},
        'seoTitle': {'type': 'STRING', 'description': 'SEO-optimized Title for Yoast (max 60 chars)'},
        'focusKeyword': {'type': 'STRING', 'description': 'The primary focus keyword for Yoast SEO'},
        'content': {'type': 'STRING', 'description': 'Full article content (800+ words) in MARKDOWN format'},
        'metaDescription': {
            'type': 'STRING',
            'description': 'Compelling meta description (STRICTLY 150-160 chars with focus keyword and CTA)'
        },
        'slug': {'type': 'STRING', 'description': 'SEO-friendly URL slug'},
        'keywords': {
            'type': 'ARRAY',
            'items': {'type': 'STRING'},
            'description': 'Main keyword and LSI keywords used'
        }
    },
    'required': ['title', 'seoTitle', 'focusKeyword', 'content', 'metaDescription', 'slug', 'keywords']
}

AUDIT_SCHEMA = {
    'type': 'OBJECT',
    'properties': {
        'rewritten': {'type': 'STRING', 'description': 'The fully humanized and audited version of the content'},
        'similarity': {'type': 'NUMBER', 'description': 'Plagiarism similarity score (0-100)'},
        'humanScore': {'type': 'NUMBER', 'description': 'Human-likeness score (0-100)'},
        'seoScore': {'type': 'NUMBER', 'description': 'SEO readiness score (0-100)'},
        'seoRecommendations': {
            'type': 'ARRAY',
            'items': {'type': 'STRING'},
            'description': 'Specific actionable SEO improvements'
        }
    },
    'required': ['rewritten', 'similarity', 'humanScore', 'seoScore', 'seoRecommendations']
}

AUDIT_CONTENT_LIMIT = 15000


def geo_target(country_code: str) -> str:
    """GLOBAL means worldwide; anything else is passed through as-is"""
    return 'worldwide' if (country_code or 'GLOBAL').upper() == 'GLOBAL' else country_code


def trends_prompt(niche: str, geo: str, category: str) -> str:
    return f"""You are a real-time Google Trends scraper. Find trending breakout topics for:
- Geo: {geo}
- Category: {category}
- Niche: {niche}

Focus on high-momentum spikes from the last 24 hours."""


def trends_fallback_prompt(niche: str, geo: str) -> str:
    return (f"Generate 5 trending breakout topics for: {niche} in {geo}. "
            "Use your internal knowledge to predict what's likely trending right now. Output in JSON.")


def date_context(start_date: str = None, end_date: str = None) -> str:
    if start_date and end_date:
        return f"Specifically for the period from {start_date} to {end_date}."
    return "Focus on recent data."


def keywords_prompt(seed: str, dates: str) -> str:
    return f"""Search for and find 10 high-value, real-world SEO keywords related to: "{seed}". {dates}
Include estimated monthly search volume, competition levels (Low, Medium, High), search intent, and keyword type.
Use Google Search data to ensure accuracy."""


def keywords_fallback_prompt(seed: str, dates: str) -> str:
    return f"""Generate a list of 10 high-value SEO keywords for: "{seed}". {dates}
Provide estimated monthly search volume and competition levels based on your internal knowledge of search patterns. Output in JSON."""


def suggestions_prompt(category: str, geo_context: str) -> str:
    return f"""Identify 5 high-momentum, rising trending topics {geo_context} within the "{category}" category that have LOW competition but high search interest today.
For each topic, provide:
1. The topic name.
2. A brief reason why it's a breakout opportunity.
3. Its commercial potential.
4. 3-5 high-value keywords associated with it."""


def suggestions_fallback_prompt(category: str, geo_context: str) -> str:
    return (f'Generate 5 high-momentum, rising trending topics {geo_context} within the "{category}" '
            "category. Use your internal knowledge. Output in JSON.")


def article_prompt(topic: str, intent: str) -> str:
    return f"""You are a professional human SEO content writer with real-world experience. Write a 100% human-like, original, and SEO-optimized article about: "{topic}".

STRICT WRITING RULES:
1. Write for humans first. Use natural, conversational language.
2. Vary sentence length naturally (short + long).
3. Avoid robotic phrases like "In today's fast-paced world", "This article will explore", or "In conclusion".
4. Write like an expert sharing real experience. Use practical examples and real-life insights.
5. Minimum length: 800-1000 words. Fully satisfy search intent.
6. Do NOT mention AI, automation, or tools like ChatGPT.
7. Intent: {intent}.

SEO & STRUCTURE (YOAST SEO COMPLIANT):
1. Use the main focus keyword naturally in the Title, within the FIRST 100 WORDS of the content, and at least one H2 heading.
2. Structure: Use MARKDOWN for formatting. H1 for title, H2 for main sections, H3 for sub-sections.
3. Paragraphs should be short (2-4 lines).
4. Include transition words for better readability.
5. Include at least 2 placeholders for internal links (e.g., [Internal Link: Related Topic]) and 1 placeholder for an external authoritative source (e.g., [External Link: Source Name]).
6. Ensure the content is structured for a high readability score.
7. Output MUST be in MARKDOWN format.

META DESCRIPTION RULES:
1. Length: STRICTLY 150-160 characters.
2. Content: Must include the primary focus keyword and a clear, compelling Call to Action (CTA).
3. Purpose: Optimized for high Click-Through Rate (CTR) in search results.

CRITICAL: OUTPUT MUST BE VALID JSON."""


def audit_prompt(content: str, title: str, keywords) -> str:
    return f"""You are an expert editor. Perform a deep humanization, plagiarism audit, and SEO analysis on the provided content.

HUMANIZATION & ORIGINALITY:
1. Rewrite any robotic or repetitive patterns into natural human speech.
2. Ensure the text is 100% unique and avoids common AI filler phrases.
3. Similarity score MUST be below 10% (where 0 means fully unique).
4. Content must feel authoritative, useful, and written by a human expert.
5. Strip any remaining AI-like over-explanations or fluff.
6. MAINTAIN ALL MARKDOWN FORMATTING (headings, lists, bold text).

SEO AUDIT (YOAST SEO STANDARDS):
1. Evaluate SEO readiness based on the title, focus keyword, and target keywords.
2. Check for keyword placement in the first 100 words, headings, and meta description.
3. Provide specific, actionable SEO recommendations for Yoast SEO optimization.

Title: {title}
Keywords: {', '.join(keywords or [])}
Content:
{(content or '')[:AUDIT_CONTENT_LIMIT]}"""


def image_prompt(topic: str) -> str:
    return (f'A unique, professional featured blog image for: "{topic}". Clean, high-impact style, '
            "minimal text, professional lighting, 16:9 aspect ratio.")
