# util/translations.py
from typing import Any, Dict
from config.settings import settings
from util.enums import Language

LANGUAGE_NAMES: Dict[Language, str] = {
    Language.ES: "Spanish",
    Language.EN: "English",
    Language.PT: "Portuguese",
}

_LIMIT = settings.MAX_DAILY_QUERIES

TRANSLATIONS: Dict[Language, Dict[str, Any]] = {
    Language.ES: {
        "title": "Veritas",
        "subtitle": "Detector de Información Falsa y Fraude",
        "placeholder": "Pegue una noticia, un correo sospechoso o arrastre archivos...",
        "urlPlaceholder": "Pegue el enlace del artículo o noticia (https://...)",
        "uploadLabel": "Archivos",
        "micLabel": "Dictar",
        "linkLabel": "Enlace",
        "analyzeBtn": "Investigar",
        "processingSteps": {
            "scanning": "Analizando huellas digitales...",
            "searching": "Cruzando bases de datos de fraude...",
            "reasoning": "Detectando patrones de engaño...",
            "finalizing": "Generando dictamen...",
        },
        "errorMediaSize": "Max 10MB.",
        "errorInput": "Se requiere contenido o enlace.",
        "errorAnalysis": "Error en el análisis.",
        "errorNoKey": "Falta la API Key. Configure GEMINI_API_KEY en su entorno.",
        "errorDictation": "Falló el dictado.",
        "errorChat": "Error.",
        "errorProcessing": "Espere a que terminen de procesarse los archivos.",
        "errorMediaNotFound": "Archivo no encontrado.",
        "errorHistoryNotFound": "Análisis no encontrado.",
        "errorChatNotFound": "Conversación no encontrada.",
        "verdictLabels": {
            "CREDIBLE": "Legítimo",
            "SUSPICIOUS": "Sospechoso",
            "FAKE": "Fraudulento",
            "SATIRE": "Sátira",
        },
        "reportHeader": "Dictamen de Seguridad",
        "analyzedContent": "Evidencia Analizada",
        "aiDetected": "Manipulado con IA",
        "aiClean": "Sin manipulación IA",
        "aiProbability": "Probabilidad",
        "summary": "Conclusión",
        "claims": "Puntos Clave",
        "sources": "Fuentes",
        "noSources": "No se encontraron fuentes públicas.",
        "chatPrompt": "¿Dudas?",
        "chatPlaceholder": "Haga una pregunta sobre el reporte...",
        "newSearch": "Reiniciar",
        "copy": "Copiar",
        "dropZone": "Suelte para analizar",
        "capabilities": ["Fake News", "Deepfakes", "Phishing", "Estafas"],
        "processingAudio": "Procesando audio...",
        "transcribing": "Transcribiendo...",
        "inputSummaryTitle": "Material Analizado",
        "scoreLabel": "Índice de Credibilidad",
        "scoreHigh": "Veraz / Fiable",
        "scoreMedium": "Dudoso / Precaución",
        "scoreLow": "Falso / Riesgo Alto",
        "originalText": "Texto Original",
        "originalUrl": "Enlace Fuente",
        "historyTitle": "Historial Reciente",
        "historyEmpty": "No hay análisis guardados.",
        "clearHistory": "Borrar todo",
        "limitTitle": "Límite Diario Alcanzado",
        "limitMsg": f"Has alcanzado el límite de {_LIMIT} consultas diarias gratuitas.",
        "limitSubMsg": "Por favor, vuelve mañana para realizar más análisis.",
        "limitBtn": "Entendido",
    },
    Language.EN: {
        "title": "Veritas",
        "subtitle": "False Information & Fraud Detector",
        "placeholder": "Paste news, suspicious email, or drop files...",
        "urlPlaceholder": "Paste article or news link (https://...)",
        "uploadLabel": "Files",
        "micLabel": "Dictate",
        "linkLabel": "Link",
        "analyzeBtn": "Investigate",
        "processingSteps": {
            "scanning": "Analyzing digital fingerprints...",
            "searching": "Checking fraud databases...",
            "reasoning": "Detecting deception patterns...",
            "finalizing": "Generating verdict...",
        },
        "errorMediaSize": "Max 10MB.",
        "errorInput": "Content or link required.",
        "errorAnalysis": "Analysis error.",
        "errorNoKey": "Missing API Key. Set GEMINI_API_KEY in your env.",
        "errorDictation": "Dictation failed.",
        "errorChat": "Error.",
        "errorProcessing": "Wait until your files finish processing.",
        "errorMediaNotFound": "File not found.",
        "errorHistoryNotFound": "Analysis not found.",
        "errorChatNotFound": "Conversation not found.",
        "verdictLabels": {
            "CREDIBLE": "Legitimate",
            "SUSPICIOUS": "Suspicious",
            "FAKE": "Fraudulent",
            "SATIRE": "Satire",
        },
        "reportHeader": "Security Verdict",
        "analyzedContent": "Analyzed Evidence",
        "aiDetected": "AI Manipulated",
        "aiClean": "No AI Manipulation",
        "aiProbability": "Probability",
        "summary": "Conclusion",
        "claims": "Key Points",
        "sources": "Sources",
        "noSources": "No public sources found.",
        "chatPrompt": "Questions?",
        "chatPlaceholder": "Ask a question about the report...",
        "newSearch": "Reset",
        "copy": "Copy",
        "dropZone": "Drop to analyze",
        "capabilities": ["Fake News", "Deepfakes", "Phishing", "Scams"],
        "processingAudio": "Processing audio...",
        "transcribing": "Transcribing...",
        "inputSummaryTitle": "Analyzed Material",
        "scoreLabel": "Credibility Index",
        "scoreHigh": "Truthful / Reliable",
        "scoreMedium": "Doubtful / Caution",
        "scoreLow": "Fake / High Risk",
        "originalText": "Original Text",
        "originalUrl": "Source Link",
        "historyTitle": "Recent History",
        "historyEmpty": "No saved analyses.",
        "clearHistory": "Clear all",
        "limitTitle": "Daily Limit Reached",
        "limitMsg": f"You have reached the limit of {_LIMIT} free daily queries.",
        "limitSubMsg": "Please come back tomorrow for more analyses.",
        "limitBtn": "Understood",
    },
    Language.PT: {
        "title": "Veritas",
        "subtitle": "Detector de Informação Falsa e Fraude",
        "placeholder": "Cole notícias, e-mail suspeito ou arraste arquivos...",
        "urlPlaceholder": "Cole o link do artigo ou notícia (https://...)",
        "uploadLabel": "Arquivos",
        "micLabel": "Ditar",
        "linkLabel": "Link",
        "analyzeBtn": "Investigar",
        "processingSteps": {
            "scanning": "Analisando impressões digitais...",
            "searching": "Verificando bancos de dados de fraude...",
            "reasoning": "Detectando padrões de engano...",
            "finalizing": "Gerando laudo...",
        },
        "errorMediaSize": "Máx 10MB.",
        "errorInput": "Conteúdo ou link necessário.",
        "errorAnalysis": "Erro na análise.",
        "errorNoKey": "Chave API ausente. Defina GEMINI_API_KEY.",
        "errorDictation": "Falha no ditado.",
        "errorChat": "Erro.",
        "errorProcessing": "Aguarde o processamento dos arquivos.",
        "errorMediaNotFound": "Arquivo não encontrado.",
        "errorHistoryNotFound": "Análise não encontrada.",
        "errorChatNotFound": "Conversa não encontrada.",
        "verdictLabels": {
            "CREDIBLE": "Legítimo",
            "SUSPICIOUS": "Suspeito",
            "FAKE": "Fraudulento",
            "SATIRE": "Sátira",
        },
        "reportHeader": "Laudo de Segurança",
        "analyzedContent": "Evidência Analisada",
        "aiDetected": "Manipulado com IA",
        "aiClean": "Sem manipulação IA",
        "aiProbability": "Probabilidade",
        "summary": "Conclusão",
        "claims": "Pontos Chave",
        "sources": "Fontes",
        "noSources": "Nenhuma fonte pública encontrada.",
        "chatPrompt": "Dúvidas?",
        "chatPlaceholder": "Faça uma pergunta sobre o laudo...",
        "newSearch": "Reiniciar",
        "copy": "Copiar",
        "dropZone": "Solte para analisar",
        "capabilities": ["Fake News", "Deepfakes", "Phishing", "Golpes"],
        "processingAudio": "Processando áudio...",
        "transcribing": "Transcrevendo...",
        "inputSummaryTitle": "Material Analisado",
        "scoreLabel": "Índice de Credibilidade",
        "scoreHigh": "Verdadeiro / Confiável",
        "scoreMedium": "Duvidoso / Cautela",
        "scoreLow": "Falso / Alto Risco",
        "originalText": "Texto Original",
        "originalUrl": "Link Fonte",
        "historyTitle": "Histórico Recente",
        "historyEmpty": "Nenhuma análise salva.",
        "clearHistory": "Limpar tudo",
        "limitTitle": "Limite Diário Atingido",
        "limitMsg": f"Você atingiu o limite de {_LIMIT} consultas diárias gratuitas.",
        "limitSubMsg": "Por favor, volte amanhã para realizar mais análises.",
        "limitBtn": "Entendido",
    },
}


def bundle(language: Language) -> Dict[str, Any]:
    return TRANSLATIONS[Language(language)]


def translate(language: Language, key: str) -> Any:
    """
    Look up `key` in the bundle for `language`, falling back to English
    and finally to the key itself.
    """
    value = bundle(language).get(key)
    if value is None:
        value = TRANSLATIONS[Language.EN].get(key, key)
    return value


def verdict_label(language: Language, verdict: str) -> str:
    return bundle(language)["verdictLabels"].get(verdict, verdict)


def step_label(language: Language, stage: str) -> str:
    steps = bundle(language)["processingSteps"]
    return steps.get(stage) or steps["scanning"]


def language_name(language: Language) -> str:
    return LANGUAGE_NAMES[Language(language)]
