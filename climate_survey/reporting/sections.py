from .keys import ALL_BUILDINGS, parse_question_key, question_label


def build_sections(summary):
    """Group scale questions into (category, building) sections for display."""
    sections = {}
    for stats in summary.get("questions", {}).values():
        parsed = parse_question_key(stats["key"])
        group = sections.setdefault((parsed.category_label, parsed.building), {
            "category": parsed.category_label,
            "building": parsed.building,
            "questions": [],
        })
        group["questions"].append(dict(stats, label=question_label(stats["key"])))

    ordered = [sections[k] for k in sorted(sections)]
    for group in ordered:
        group["questions"].sort(key=lambda q: q["key"])
    return ordered


def build_free_text_rows(summary):
    """One row per free-text question (and building), sorted for display."""
    rows = []
    for key, collected in summary.get("freeText", {}).items():
        parsed = parse_question_key(key)
        if isinstance(collected, dict):
            # grouped by building: key is the question id
            buckets = collected.items()
        else:
            buckets = [(parsed.building, collected)]
        for building, responses in buckets:
            rows.append({
                "key": key,
                "label": question_label(key),
                "category": parsed.category_label,
                "building": building or ALL_BUILDINGS,
                "responses": list(responses),
            })

    rows.sort(key=lambda r: (r["category"], r["building"], r["key"]))
    return rows
