"""CSS selector constants for the scraping adapters.

Each field lists candidates ordered by stability: data-* > semantic > class names.
Sites redesign without notice; an empty scrape is treated like a source outage.
"""

from jobhunt.sources.html import CardSelectors

LINKEDIN = CardSelectors(
    card=("li", "div.base-card"),
    title=(".base-search-card__title", "h3"),
    link=("a.base-card__full-link", 'a[href*="/jobs/view/"]'),
    company=(".base-search-card__subtitle", "h4"),
    location=(".job-search-card__location",),
    posted_at=("time",),
)

CATHO = CardSelectors(
    card=("[data-testid='job-card']", ".job-card", "article"),
    title=("h2", "[data-testid='job-title']", ".job-card__title"),
    link=("h2 a", "a"),
    company=("[data-testid='job-company']", ".job-card__company"),
    location=("[data-testid='job-location']", ".job-card__location"),
    salary=("[data-testid='job-salary']", ".job-card__salary"),
)

GOOGLE = CardSelectors(
    card=(".PwjeAc", ".gws-plugins-horizon-jobs__tl-lif", "li.iFjolb"),
    title=(".BjJfJf", ".sH3zFd", "div[role='heading']"),
    link=("a[href^='http']",),
    company=(".vNEEBe", ".nJlDiv", ".wHhUb"),
    location=(".Qk80Jf", ".pwTheOc", ".e6m0Sd"),
)

GLASSDOOR = CardSelectors(
    card=(
        "[data-test='jobListing']",
        ".JobsList_jobListItem__JBBUQ",
        "li.react-job-listing",
    ),
    title=("[data-test='job-title']", ".jobTitle", ".job-title"),
    link=("a[data-test='job-title']", "a.jobTitle", "a"),
    company=(
        "[data-test='emp-name']",
        ".EmployerProfile_compactEmployerName__LE242",
        ".job-search-key-l2wjgv",
    ),
    location=(
        "[data-test='emp-location']",
        ".compactEmployerLocation",
        ".job-search-key-1p4ilu3",
    ),
    salary=("[data-test='detailSalary']",),
)

PROGRAMATHOR = CardSelectors(
    card=(".cell-list__item", ".card-job", ".job-card", "article"),
    title=("h3", ".cell-list__item-title", ".card-job__title", ".job-card__title"),
    link=("a",),
    company=(".cell-list__item-company", ".card-job__company", ".job-card__company"),
    location=(".cell-list__item-local", ".card-job__location"),
    salary=(".cell-list__item-salary", ".card-job__salary"),
    tags=(".tag-list span", ".cell-list__item-tags span"),
)

FREELAS99 = CardSelectors(
    card=(".result-container", ".project-list__item", ".project-item", "li.result", "article"),
    title=("h1 a", "h2 a", ".result-container__title a", ".project-name a"),
    link=("h1 a", "h2 a", ".result-container__title a", ".project-name a"),
    description=(".result-container__description", ".project-description", "p"),
    salary=(".result-container__budget", ".project-budget", ".budget"),
    tags=(".result-container__skills a", ".skill-tag", ".tag"),
)
