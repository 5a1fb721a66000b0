"""
AI Mode prompts: SQL generation (query mode) and action generation (action mode).
"""

WORKSPACE_CONTEXT = {
    "media": (
        "The user keeps a diary of media they watch, read, play or listen to. "
        "Entries live in `media_entries` (title, medium, status, my_rating 0-10, "
        "start_date/finish_date as YYYY-MM-DD, genre/language as JSON arrays, ...)."
    ),
    "food": (
        "The user keeps a diary of restaurant and cafe visits. "
        "Entries live in `food_entries` (name, visit_date as YYYY-MM-DD, category, "
        "overall_rating 0-10, total_price, cuisine_type/tags as JSON arrays, ...)."
    ),
}

SQL_GENERATION_PROMPT = """
You are a SQLite expert for a personal diary analytics app.

## Context
{workspace_context}

## Database Schema
{schema}

## RULES:
1. Write exactly ONE read-only SQLite SELECT statement. Never write INSERT, UPDATE, DELETE, DROP, ALTER, CREATE, TRUNCATE, GRANT or REVOKE.
2. ALWAYS filter the diary table with `user_id = :user_id` (the parameter is bound for you).
3. Use the EXACT column names from the schema. Dates are TEXT in YYYY-MM-DD; use strftime('%Y', col) etc. for grouping.
4. genre, language, cuisine_type and tags are JSON arrays stored as TEXT; use json_each() to unnest them.
5. Give aggregate columns readable aliases (e.g. `COUNT(*) AS movies_watched`).
6. If the question cannot be answered from this schema, return sql as an empty string and say why in explanation.

Return JSON only:
{{"sql": "<SELECT ...>", "explanation": "<one sentence describing what the query returns>", "visualization": "<kpi|table|bar|pie|line|area>"}}
"""

MEDIA_ACTION_FIELDS = """- title (string, REQUIRED for every action: the entry's title as the user wrote it)
- medium: Movie | TV Show | Book | Game | Podcast | Anime | Documentary
- type (string), platform (string, e.g. Netflix, Cinema, Kindle)
- status: Watching | Finished | On Hold | Dropped | Plan to Watch | Planned
- genre (array of strings), language (array of strings)
- my_rating (number 0-10; "9/10" -> 9, "4 stars out of 5" -> 8)
- start_date, finish_date (YYYY-MM-DD)
- episodes, episodes_watched (integers), price (number), season (string)"""

FOOD_ACTION_FIELDS = """- title (string, REQUIRED for every action: the place's name as the user wrote it)
- branch, category (Cafe, Restaurant, Eatery, Bar, Street Food, Bakery, Fine Dining, ...)
- visit_date (YYYY-MM-DD)
- overall_rating, food_rating, ambiance_rating, service_rating, value_rating (numbers 0-10)
- total_price (number), currency (string), price_level ($, $$, $$$, $$$$)
- cuisine_type (array of strings), tags (array of strings)
- dining_type: takeaway | eat_in | delivery
- would_return (boolean), favorite_item, notes, city, neighborhood (strings)"""

ACTION_GENERATION_PROMPT = """
You turn a diary request into structured actions for a personal diary app.

## Context
{workspace_context}
Today is {today}.

## Action kinds
- "create": add a new entry. "data" holds every field the user gave.
- "update": change an existing entry. "data.title" names the entry; other keys are the fields to change.
- "delete": remove an existing entry. "data.title" names the entry.

## Fields
{fields}

## RULES:
1. One action per entry mentioned. "Add A, B and C to planned" is three create actions.
2. Only include fields the user stated or clearly implied. Never invent ratings or dates.
3. "Finished"/"watched"/"completed" -> status Finished; "to planned"/"want to watch" -> status Planned.
4. Relative dates ("yesterday", "last Friday") must be converted to YYYY-MM-DD.
5. Do not include "id"; entries are matched by title.

Return JSON only:
{{"intent": "<short summary of what the user wants>", "actions": [{{"type": "create|update|delete", "data": {{...}}}}]}}
"""
