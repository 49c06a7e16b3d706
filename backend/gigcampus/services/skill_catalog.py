"""
Skill Catalog - Reference tables for resume scoring

Fixed keyword tables and regular expressions used by the resume analyzer
and the text extraction keyword categorizer. Everything here is data;
the scoring rules that consume it live in resume_analyzer.py.

Matching conventions:
    - Analyzer tables are matched as case-insensitive substrings, so
      "Java" also hits "JavaScript" and "SQL" hits "PostgreSQL".
    - Extraction keyword tables (*_KEYWORDS) are matched on word
      boundaries, see text_extraction.categorize_keywords.
    - SKILL_CATALOG order is significant: extracted skills are reported
      in catalog order, not in the order they appear in the text.
"""

import re

# ==============================================================================
# Skill extraction
# ==============================================================================

SKILL_CATALOG = [
    # Programming languages
    "Python", "JavaScript", "TypeScript", "Java", "C++", "C#", "Go", "Rust", "Swift", "Kotlin",
    "PHP", "Ruby", "Scala", "MATLAB", "SQL", "HTML", "CSS", "Dart",
    # Frameworks & libraries
    "React", "Angular", "Vue.js", "Node.js", "Express", "Django", "Flask", "Spring", "Laravel",
    "Rails", "ASP.NET", "jQuery", "Bootstrap", "Tailwind", "Sass", "Less",
    # Databases
    "PostgreSQL", "MySQL", "MongoDB", "Redis", "SQLite", "Oracle", "SQL Server", "DynamoDB",
    "Cassandra", "Neo4j", "Elasticsearch",
    # Cloud & DevOps
    "AWS", "Azure", "Google Cloud", "Docker", "Kubernetes", "Jenkins", "Git", "GitHub", "GitLab",
    "CI/CD", "Terraform", "Ansible", "Linux", "Ubuntu", "CentOS",
    # Data science & AI
    "TensorFlow", "PyTorch", "Scikit-learn", "Pandas", "NumPy", "Matplotlib", "Seaborn",
    "Jupyter", "Apache Spark", "Hadoop", "Tableau", "Power BI",
    # Design
    "Figma", "Adobe XD", "Sketch", "Photoshop", "Illustrator", "InDesign", "Principle",
    "Framer", "Zeplin", "InVision",
    # Other
    "REST API", "GraphQL", "Microservices", "Agile", "Scrum", "Machine Learning",
    "Deep Learning", "Computer Vision", "NLP", "Blockchain", "Web3",
]

# ==============================================================================
# Keyword match count (each entry contributes at most once)
# ==============================================================================

KEYWORD_REFERENCE = [
    # Technical skills
    "Python", "JavaScript", "TypeScript", "Java", "C++", "C#", "Go", "Rust", "Swift", "Kotlin",
    "React", "Angular", "Vue.js", "Node.js", "Express", "Django", "Flask", "Spring", "Laravel",
    "PostgreSQL", "MySQL", "MongoDB", "Redis", "SQLite", "Oracle", "SQL Server",
    "AWS", "Azure", "Google Cloud", "Docker", "Kubernetes", "Jenkins", "Git", "GitHub",
    "TensorFlow", "PyTorch", "Scikit-learn", "Pandas", "NumPy", "Matplotlib", "Seaborn",
    "Figma", "Adobe XD", "Sketch", "Photoshop", "Illustrator",
    "REST API", "GraphQL", "Microservices", "Machine Learning", "Deep Learning",
    "Computer Vision", "NLP", "Blockchain", "Web3",
    # Professional terms
    "Software Engineer", "Developer", "Programmer", "Architect", "Lead", "Senior", "Principal",
    "Full-stack", "Frontend", "Backend", "DevOps", "Data Scientist", "Analyst",
    "Project Manager", "Product Manager", "Technical Lead", "Team Lead",
    "Agile", "Scrum", "CI/CD", "Test Driven Development", "Code Review",
    # Experience indicators
    "Experience", "Years", "Intern", "Internship", "Freelance", "Contract",
    "Startup", "Enterprise", "Scale", "Performance", "Optimization",
    "Leadership", "Mentoring", "Training", "Management", "Coordination",
    # Education terms
    "Bachelor", "Master", "PhD", "Doctorate", "Degree", "Certificate", "Diploma",
    "University", "College", "Institute", "School", "GPA", "Graduated",
    "Computer Science", "Engineering", "Mathematics", "Physics", "Statistics",
    # Achievement terms
    "Achieved", "Improved", "Increased", "Reduced", "Optimized", "Developed",
    "Created", "Built", "Designed", "Implemented", "Deployed", "Launched",
    "Award", "Recognition", "Honor", "Scholarship", "Grant", "Publication",
]

# ==============================================================================
# Technical depth: bucket -> (points per matching skill, tokens)
# ==============================================================================

TECHNICAL_DEPTH_BUCKETS = {
    "languages": (50, ["Python", "JavaScript", "TypeScript", "Java", "C++", "C#", "Go", "Rust"]),
    "frameworks": (40, ["React", "Angular", "Vue", "Node.js", "Express", "Django", "Flask", "Spring"]),
    "cloud": (60, ["AWS", "Azure", "Google Cloud", "Docker", "Kubernetes", "Jenkins", "CI/CD"]),
    "ai_ml": (70, ["TensorFlow", "PyTorch", "Machine Learning", "Deep Learning", "Pandas", "NumPy"]),
    "databases": (30, ["PostgreSQL", "MySQL", "MongoDB", "Redis", "SQL", "NoSQL"]),
}

# ==============================================================================
# Skill rating
# ==============================================================================

# (minimum skill count, bonus), checked top-down
SKILL_COUNT_TIERS = [(20, 800), (15, 600), (10, 400), (7, 300), (5, 200), (3, 100)]

HIGH_VALUE_SKILLS = [
    "React", "Angular", "Vue", "Node.js", "Python", "TypeScript", "Java",
    "AWS", "Azure", "Google Cloud", "Docker", "Kubernetes", "Jenkins",
    "TensorFlow", "PyTorch", "Machine Learning", "Deep Learning",
    "PostgreSQL", "MongoDB", "Redis", "GraphQL", "REST API",
]

SKILL_DIVERSITY_CATEGORIES = {
    "languages": ["Python", "JavaScript", "Java", "C++", "Go", "Rust"],
    "frameworks": ["React", "Angular", "Vue", "Django", "Flask", "Spring"],
    "databases": ["PostgreSQL", "MySQL", "MongoDB", "Redis"],
    "cloud": ["AWS", "Azure", "Google Cloud", "Docker"],
    "ai": ["TensorFlow", "PyTorch", "Machine Learning", "Pandas"],
}

# ==============================================================================
# Experience
# ==============================================================================

_YEAR = r"(?:\d{4}|\d{1,2}/\d{4})"

EXPERIENCE_PATTERNS = [
    re.compile(
        r"(?:Intern|Developer|Engineer|Designer|Analyst|Manager|Lead|Senior|Junior|Associate).*?" + _YEAR,
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:Software|Web|Mobile|Data|UX|UI|Frontend|Backend|Full-stack).*?(?:Developer|Engineer|Designer)",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:Google|Microsoft|Apple|Amazon|Facebook|Meta|Netflix|Uber|Airbnb|Tesla|SpaceX).*?" + _YEAR,
        re.IGNORECASE,
    ),
]
MAX_EXPERIENCE_ENTRIES = 5

EXPERIENCE_COUNT_TIERS = [(8, 600), (6, 500), (4, 400), (3, 300), (2, 200), (1, 100)]

SENIORITY_TERMS = ["Senior", "Lead", "Principal", "Architect", "Manager", "Director"]

YEARS_OF_EXPERIENCE_PATTERNS = [
    re.compile(r"\d+\+?\s*years?", re.IGNORECASE),
    re.compile(r"\d+\+?\s*yrs?", re.IGNORECASE),
    re.compile(r"(\d{4})\s*-\s*(\d{4})"),
]

# Employers counted towards professional level
PRESTIGIOUS_COMPANIES = ["Google", "Microsoft", "Apple", "Amazon", "Facebook", "Meta", "Netflix", "Uber"]

# Employers counted towards experience rating
PRESTIGIOUS_EMPLOYERS = PRESTIGIOUS_COMPANIES + ["Airbnb", "Tesla"]

LEADERSHIP_VERBS = ["led", "managed", "mentored", "trained", "coordinated", "supervised"]

LEADERSHIP_TITLES = ["Lead", "Senior", "Principal", "Manager", "Director", "Architect", "Head"]

INTERNSHIP_TERMS = ["Intern", "Internship", "Co-op", "Trainee"]

FREELANCE_TERMS = ["Freelance", "Contract", "Consultant", "Self-employed"]

# ==============================================================================
# Education
# ==============================================================================

# Word boundaries are required: without them "submitted" or "commit" reads as MIT
ELITE_UNIVERSITY_PATTERN = re.compile(
    r"\b(?:MIT|Stanford|Harvard|Berkeley|Caltech|CMU|Georgia Tech|UIUC|UCLA|UCSD)\b",
    re.IGNORECASE,
)

EDUCATION_PATTERNS = [
    re.compile(r"(?:University|College|Institute|School).*?" + _YEAR, re.IGNORECASE),
    re.compile(
        r"(?:Bachelor|Master|PhD|Associate|Certificate).*?(?:Science|Engineering|Arts|Business)",
        re.IGNORECASE,
    ),
    ELITE_UNIVERSITY_PATTERN,
]
MAX_EDUCATION_ENTRIES = 3

EDUCATION_COUNT_TIERS = [(3, 300), (2, 200), (1, 100)]

PRESTIGIOUS_UNIVERSITIES = [
    "MIT", "Stanford", "Harvard", "Berkeley", "Caltech", "CMU", "Princeton", "Yale",
    "Columbia", "Chicago", "Cornell", "Penn", "Brown", "Dartmouth", "Duke",
    "Northwestern", "Johns Hopkins", "Rice", "Vanderbilt", "WashU", "Emory",
    "Georgetown", "Carnegie Mellon", "Georgia Tech", "UCLA", "UCSD", "UCSB",
    "UCI", "UCD", "UCSF",
]

PHD_TERMS = ["PhD", "Doctorate", "Doctor of Philosophy"]

MASTER_TERMS = ["Master", "Masters", "MBA", "MS", "MA", "MEng", "MSc"]

TECHNICAL_FIELDS = [
    "Computer Science", "Software Engineering", "Data Science", "Artificial Intelligence",
    "Machine Learning", "Cybersecurity", "Information Technology", "Engineering",
    "Mathematics", "Statistics", "Physics", "Electrical Engineering", "Computer Engineering",
]

GPA_PATTERNS = [
    re.compile(r"GPA[:\s]*(\d+\.?\d*)", re.IGNORECASE),
    re.compile(r"Grade[:\s]*Point[:\s]*Average[:\s]*(\d+\.?\d*)", re.IGNORECASE),
    re.compile(r"(\d+\.?\d*)\s*/\s*4\.?0?", re.IGNORECASE),
]

ACADEMIC_ACHIEVEMENTS = [
    "Summa Cum Laude", "Magna Cum Laude", "Cum Laude", "Dean's List",
    "Honor Roll", "Scholarship", "Fellowship", "Research", "Thesis",
    "Dissertation", "Publication", "Conference", "Award", "Recognition",
]

# ==============================================================================
# Extraction keyword categories (word-boundary matching)
# ==============================================================================

TECHNICAL_KEYWORDS = [
    # Programming languages
    "python", "javascript", "typescript", "java", "c++", "c#", "go", "rust", "swift", "kotlin",
    "php", "ruby", "scala", "matlab", "sql", "html", "css", "dart", "perl", "bash",
    "c", "csharp", "objective-c", "assembly", "fortran", "cobol", "pascal", "ada",
    # Frameworks & libraries
    "react", "angular", "vue.js", "vue", "node.js", "nodejs", "express", "django", "flask", "spring",
    "laravel", "rails", "asp.net", "jquery", "bootstrap", "tailwind", "sass", "less", "webpack",
    "babel", "jest", "mocha", "chai", "cypress", "selenium", "pytest", "junit", "next.js",
    "nuxt.js", "ember", "backbone", "knockout", "aurelia", "polymer", "lit", "stencil",
    # Databases
    "postgresql", "mysql", "mongodb", "redis", "sqlite", "oracle", "sql server", "dynamodb",
    "cassandra", "neo4j", "elasticsearch", "firebase", "supabase", "couchdb", "riak",
    "influxdb", "timescaledb", "cockroachdb", "planetscale",
    # Cloud & DevOps
    "aws", "amazon web services", "azure", "google cloud", "gcp", "docker", "kubernetes", "k8s",
    "jenkins", "git", "github", "gitlab", "bitbucket", "ci/cd", "terraform", "ansible",
    "linux", "ubuntu", "centos", "debian", "nginx", "apache", "helm", "prometheus",
    "grafana", "kibana", "logstash", "consul", "vault", "nomad", "packer",
    # Data science & AI
    "tensorflow", "pytorch", "scikit-learn", "sklearn", "pandas", "numpy", "matplotlib",
    "seaborn", "jupyter", "apache spark", "hadoop", "tableau", "power bi", "plotly",
    "machine learning", "deep learning", "neural networks", "nlp", "natural language processing",
    "computer vision", "opencv", "scipy", "statsmodels", "keras", "theano", "caffe",
    "mxnet", "chainer", "pytorch lightning", "hugging face", "transformers",
    # Design & UI/UX
    "figma", "adobe xd", "sketch", "photoshop", "illustrator", "indesign", "principle",
    "framer", "zeplin", "invision", "canva", "adobe creative suite", "adobe photoshop",
    "adobe illustrator", "adobe indesign", "adobe after effects", "blender", "cinema 4d",
    # Mobile
    "react native", "flutter", "ios", "android", "xcode", "android studio", "expo",
    "ionic", "cordova", "phonegap", "xamarin", "unity", "unreal engine",
    # Other
    "rest api", "graphql", "microservices", "agile", "scrum", "kanban", "tdd", "bdd",
    "blockchain", "web3", "ethereum", "solidity", "smart contracts", "cryptocurrency",
    "bitcoin", "hyperledger", "ipfs", "arweave", "polkadot", "cosmos", "chainlink",
]

PROFESSIONAL_KEYWORDS = [
    "software engineer", "developer", "programmer", "architect", "lead", "senior", "principal",
    "full-stack", "frontend", "backend", "devops", "data scientist", "analyst", "consultant",
    "project manager", "product manager", "technical lead", "team lead", "engineering manager",
    "scrum master", "product owner", "solutions architect", "system administrator",
    "database administrator", "security engineer", "qa engineer", "test engineer",
    "ui/ux designer", "product designer", "user experience", "user interface",
    "business analyst", "data analyst", "research scientist", "machine learning engineer",
    "cloud engineer", "site reliability engineer", "sre", "platform engineer",
    "mobile developer", "ios developer", "android developer", "web developer",
    "full stack developer", "frontend developer", "backend developer",
]

EDUCATION_KEYWORDS = [
    "bachelor", "master", "phd", "doctorate", "degree", "certificate", "diploma",
    "university", "college", "institute", "school", "gpa", "graduated", "alumni",
    "computer science", "engineering", "mathematics", "physics", "statistics",
    "information technology", "software engineering", "data science", "artificial intelligence",
    "cybersecurity", "electrical engineering", "computer engineering", "business administration",
    "mba", "ms", "ma", "bs", "ba", "bsc", "msc", "meng", "beng", "associate",
    "summa cum laude", "magna cum laude", "cum laude", "dean's list", "honor roll",
    "scholarship", "fellowship", "research", "thesis", "dissertation", "publication",
    "bachelor of science", "master of science", "doctor of philosophy", "bachelor of arts",
    "master of arts", "bachelor of engineering", "master of engineering",
]

EXPERIENCE_KEYWORDS = [
    "intern", "internship", "co-op", "trainee", "apprentice", "entry level", "junior",
    "mid-level", "senior", "lead", "principal", "staff", "director", "vp", "cto",
    "freelance", "contract", "consultant", "self-employed", "startup", "enterprise",
    "fortune 500", "faang", "big tech", "unicorn", "scale-up", "growth stage",
    "years of experience", "yoe", "leadership", "management", "mentoring", "training",
    "team building", "cross-functional", "collaboration", "stakeholder", "client",
    "customer", "user", "agile", "scrum", "kanban", "waterfall", "lean", "six sigma",
    "google", "microsoft", "apple", "amazon", "facebook", "meta", "netflix", "uber",
    "airbnb", "tesla", "spacex", "twitter", "linkedin", "salesforce", "oracle",
    "ibm", "intel", "nvidia", "amd", "cisco", "vmware", "adobe",
]
