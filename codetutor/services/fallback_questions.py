"""
Canned questions served when Gemini is unavailable.

Known subjects map to fixed sets; anything else gets the generic template,
whose correct answers are re-rolled on every call.
"""

import random
from typing import Callable, Dict, List

from codetutor.schemas.quiz import Category, QuizQuestion


def _q(id: int, question: str, options: List[str], correct: int, explanation: str,
       category: Category) -> QuizQuestion:
    return QuizQuestion(
        id=id,
        question=question,
        options=options,
        correct_answer=correct,
        explanation=explanation,
        category=category,
    )


def html_questions(topic: str, category: Category) -> List[QuizQuestion]:
    return [
        _q(1, "O que significa a sigla HTML?",
           ["Hyper Text Markup Language", "High Tech Modern Language",
            "Hyperlink Text Management Language", "Home Tool Markup Language"],
           0,
           "HTML stands for Hyper Text Markup Language, which is the standard markup "
           "language for creating Web pages.",
           category),
        _q(2, "Qual tag é usada para criar um parágrafo em HTML?",
           ["<paragraph>", "<p>", "<para>", "<text>"],
           1,
           "The <p> tag defines a paragraph in HTML documents.",
           category),
        _q(3, "Qual elemento HTML define o título da página que aparece na aba do navegador?",
           ["<header>", "<heading>", "<title>", "<h1>"],
           2,
           "The <title> tag defines the document's title that is shown in a browser's "
           "title bar or a page's tab.",
           category),
    ]


def css_questions(topic: str, category: Category) -> List[QuizQuestion]:
    return [
        _q(1, "Qual propriedade CSS é usada para mudar a cor do texto?",
           ["text-color", "font-color", "color", "text-style"],
           2,
           "The color property is used to set the color of the text.",
           category),
        _q(2, "Qual propriedade CSS é usada para definir a fonte do texto?",
           ["text-font", "font-family", "font-style", "text-family"],
           1,
           "The font-family property specifies the font for text.",
           category),
        _q(3, "Como você pode adicionar uma sombra a um elemento em CSS?",
           ["shadow-effect", "text-shadow", "box-shadow", "element-shadow"],
           2,
           "The box-shadow property attaches one or more shadows to an element.",
           category),
    ]


def javascript_questions(topic: str, category: Category) -> List[QuizQuestion]:
    return [
        _q(1, "Qual função é usada para imprimir algo no console em JavaScript?",
           ["console.print()", "console.log()", "print()", "log()"],
           1,
           "console.log() is used to output a message to the web console.",
           category),
        _q(2, "Como você declara uma variável em JavaScript moderno?",
           ["var", "let", "const", "both let and const"],
           3,
           "Both let and const are used to declare variables in modern JavaScript. let is "
           "used for variables that can be reassigned, while const is for constants.",
           category),
        _q(3, "O que faz o método Array.map()?",
           ["Modifica o array original",
            "Cria um novo array com os resultados da função aplicada a cada elemento",
            "Filtra o array",
            "Combina todos os elementos do array"],
           1,
           "The map() method creates a new array with the results of calling a function "
           "for every array element.",
           category),
    ]


def generic_questions(topic: str, category: Category) -> List[QuizQuestion]:
    # Correct answers are random on purpose: the same prompt can have a
    # different "right" option on each call.
    return [
        _q(1, f"O que é {topic}?",
           ["Uma linguagem de programação", "Uma ferramenta de desenvolvimento",
            "Um framework de desenvolvimento", "Uma plataforma web"],
           random.randint(0, 3),
           f"Esta é uma pergunta de exemplo sobre {topic}.",
           category),
        _q(2, f"Qual é a principal característica de {topic}?",
           ["Facilidade de uso", "Performance", "Escalabilidade", "Compatibilidade"],
           random.randint(0, 3),
           f"Esta é outra pergunta de exemplo sobre {topic}.",
           category),
        _q(3, f"Quando {topic} foi criado?",
           ["Anos 1990", "Anos 2000", "Anos 2010", "Anos 2020"],
           random.randint(0, 3),
           f"Esta é mais uma pergunta de exemplo sobre {topic}.",
           category),
    ]


def placeholder_questions(category: Category) -> List[QuizQuestion]:
    """Last-resort set used when resolution itself blew up."""
    options = ["Opção A", "Opção B", "Opção C", "Opção D"]
    return [
        _q(1, "Questão de exemplo 1", list(options), 0, "Esta é uma questão de exemplo.", category),
        _q(2, "Questão de exemplo 2", list(options), 1, "Esta é outra questão de exemplo.", category),
        _q(3, "Questão de exemplo 3", list(options), 2, "Esta é mais uma questão de exemplo.", category),
    ]


QuestionSetFactory = Callable[[str, Category], List[QuizQuestion]]

CANNED_SETS: Dict[str, QuestionSetFactory] = {
    "html": html_questions,
    "css": css_questions,
    "javascript": javascript_questions,
}


def fallback_questions(topic: str, category: Category) -> List[QuizQuestion]:
    """Pick the canned set for topic (case-insensitive) or the generic template."""
    factory = CANNED_SETS.get(topic.lower(), generic_questions)
    return factory(topic, category)
