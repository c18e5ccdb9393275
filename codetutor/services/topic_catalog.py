from typing import Dict, List, Optional

from codetutor.schemas.catalog import Lesson, Topic, TopicLevel, TopicView

LEARNING_TOPICS: List[Topic] = [
    Topic(
        id="html",
        name="HTML",
        description="A linguagem de marcação padrão para criar páginas web.",
        icon="logo-html5",
        color="#E44D26",
        difficulty=TopicLevel.beginner,
    ),
    Topic(
        id="css",
        name="CSS",
        description="Linguagem de estilo usada para descrever a apresentação de um documento HTML.",
        icon="logo-css3",
        color="#264DE4",
        difficulty=TopicLevel.beginner,
    ),
    Topic(
        id="javascript",
        name="JavaScript",
        description=(
            "Linguagem de programação que permite implementar funcionalidades "
            "complexas em páginas web."
        ),
        icon="logo-javascript",
        color="#F7DF1E",
        difficulty=TopicLevel.intermediate,
    ),
    Topic(
        id="react",
        name="React",
        description="Biblioteca JavaScript para construir interfaces de usuário.",
        icon="logo-react",
        color="#61DAFB",
        difficulty=TopicLevel.intermediate,
    ),
    Topic(
        id="nodejs",
        name="Node.js",
        description="Ambiente de execução JavaScript do lado do servidor.",
        icon="server-outline",
        color="#339933",
        difficulty=TopicLevel.intermediate,
    ),
]

_DIFFICULTY_LABELS = {
    TopicLevel.beginner: "Iniciante",
    TopicLevel.intermediate: "Intermediário",
    TopicLevel.advanced: "Avançado",
}


def get_difficulty_label(difficulty: Optional[str]) -> str:
    try:
        return _DIFFICULTY_LABELS[TopicLevel(difficulty)]
    except ValueError:
        return "Todos os níveis"


def get_topic_by_id(topic_id: str) -> Topic:
    """Unknown ids fall back to the first topic, like the learning path does."""
    return next((t for t in LEARNING_TOPICS if t.id == topic_id), LEARNING_TOPICS[0])


def find_topic(topic_id: str) -> Optional[Topic]:
    return next((t for t in LEARNING_TOPICS if t.id == topic_id), None)


def topic_view(topic: Topic) -> TopicView:
    return TopicView(**topic.model_dump(), difficulty_label=get_difficulty_label(topic.difficulty))


# ── Tutor lessons ────────────────────────────────────────────────────────────

TUTOR_LESSONS: Dict[str, Lesson] = {
    lesson.id: lesson
    for lesson in [
        Lesson(id="html_intro", name="Introdução ao HTML",
               description="Fundamentos básicos do HTML, tags e estrutura.",
               level=1, category="frontend", icon="code-slash-outline"),
        Lesson(id="html_semantic", name="HTML Semântico",
               description="Uso correto de tags semânticas para melhor estrutura.",
               level=2, category="frontend", prerequisite="html_intro",
               icon="document-text-outline"),
        Lesson(id="css_basics", name="Fundamentos de CSS",
               description="Estilização básica com CSS, seletores e propriedades.",
               level=1, category="frontend", prerequisite="html_intro",
               icon="color-palette-outline"),
        Lesson(id="css_layout", name="Layouts em CSS",
               description="Técnicas de layout como Flexbox e Grid.",
               level=2, category="frontend", prerequisite="css_basics", icon="grid-outline"),
        Lesson(id="js_intro", name="Introdução ao JavaScript",
               description="Fundamentos da linguagem JavaScript.",
               level=1, category="programming", prerequisite="html_intro",
               icon="logo-javascript"),
        Lesson(id="js_dom", name="JavaScript e DOM",
               description="Manipulação do DOM com JavaScript.",
               level=2, category="programming", prerequisite="js_intro",
               icon="construct-outline"),
        Lesson(id="responsive", name="Design Responsivo",
               description="Criação de sites que funcionam em diferentes dispositivos.",
               level=3, category="frontend", prerequisite="css_layout",
               icon="phone-portrait-outline"),
    ]
}
