"""Built-in institutional knowledge base (Masters Union).

Used as the static context when no vector index is available and by the
rule-based responder when generation fails.
"""

DEFAULT_KNOWLEDGE_BASE: dict[str, dict[str, str]] = {
    "about": {
        "overview": (
            "Masters Union is a new age college which focuses on learning by doing, where students "
            "learn from industry experts. The college emphasizes practical knowledge and real-world "
            "experience in its educational approach."
        ),
        "mission": (
            "Masters Union's mission is to bridge the gap between academic education and industry "
            "requirements by providing hands-on learning experiences guided by industry leaders."
        ),
        "history": (
            "Masters Union was founded with the vision to revolutionize higher education in India by "
            "bringing industry experts directly into the classroom and focusing on practical, "
            "project-based learning."
        ),
    },
    "programs": {
        "mba": (
            "The Masters' Union PGP in Business Management is a 16-month, full-time residential program "
            "designed to prepare students for leadership roles in the business world. The curriculum "
            "combines core business fundamentals with practical projects and industry immersion."
        ),
        "tech": (
            "Masters Union offers technology-focused programs that combine computer science fundamentals "
            "with practical software development skills. Students work on real-world projects under the "
            "guidance of industry experts."
        ),
        "finance": (
            "The finance program at Masters Union provides comprehensive training in financial analysis, "
            "investment management, and financial technology. Students learn from CFOs, investment "
            "bankers, and finance professionals."
        ),
    },
    "faculty": {
        "approach": (
            "Masters Union faculty consists of industry practitioners, business leaders, and subject "
            "matter experts who bring real-world experience into the classroom."
        ),
        "experts": (
            "Faculty members include CEOs, entrepreneurs, policy makers, investors, and other industry "
            "leaders who are active in their respective fields."
        ),
    },
    "admissions": {
        "process": (
            "The admissions process at Masters Union is highly selective and includes application review, "
            "entrance examinations, and personal interviews to identify candidates with strong academic "
            "backgrounds and leadership potential."
        ),
        "requirements": (
            "Applicants typically need a bachelor's degree with a strong academic record, competitive "
            "entrance exam scores, and relevant work experience is preferred but not mandatory."
        ),
        "deadlines": (
            "Masters Union follows a rolling admissions process with multiple application rounds "
            "throughout the year. Early applications are encouraged."
        ),
    },
    "campus": {
        "location": (
            "Masters Union campus is located in Gurugram, India, providing easy access to the business "
            "hub of the National Capital Region."
        ),
        "facilities": (
            "The campus features modern classrooms, collaboration spaces, technology labs, a library, "
            "and recreational facilities designed to enhance the learning experience."
        ),
    },
    "placements": {
        "opportunities": (
            "Masters Union has strong industry connections that provide students with internship and job "
            "opportunities at leading companies across various sectors."
        ),
        "companies": (
            "Graduates have been placed in prestigious organizations including consulting firms, "
            "technology companies, financial institutions, and startups."
        ),
        "salary": (
            "Masters Union graduates typically receive competitive compensation packages reflecting their "
            "specialized skills and industry-ready training."
        ),
    },
    "fees": {
        "structure": (
            "Tuition fees at Masters Union cover academic instruction, learning materials, and access to "
            "campus facilities. Additional costs may include accommodation, meals, and personal expenses."
        ),
        "scholarships": (
            "Masters Union offers merit-based scholarships and financial aid options to deserving "
            "candidates based on academic excellence and financial need."
        ),
    },
    "contact": {
        "email": "admissions@mastersunion.org",
        "phone": "+91-XXXXXXXXXX",
        "website": "www.mastersunion.org",
    },
}

# Extra query words that point at a section besides its own name and keys
SECTION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "about": ("college", "school", "university", "founded", "vision", "who"),
    "programs": ("program", "course", "courses", "pgp", "degree", "curriculum", "technology", "business"),
    "faculty": ("professor", "professors", "teachers", "teach", "mentors", "instructors"),
    "admissions": ("admission", "apply", "application", "eligibility", "entrance", "interview", "deadline"),
    "campus": ("gurugram", "where", "hostel", "library", "labs"),
    "placements": ("placement", "jobs", "job", "internship", "internships", "recruiters", "package", "career"),
    "fees": ("fee", "cost", "tuition", "price", "scholarship", "financial", "aid"),
    "contact": ("email", "phone", "reach", "call", "website"),
}
