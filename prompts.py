# prompts.py
from typing import Iterable

from schemas import Product, User

BUG_TEMPLATE = """
### REGRAS OBRIGATÓRIAS PARA O CAMPO "description" quando a categoria for BUG:
- A descrição DEVE seguir sempre este formato, nesta ordem e com os mesmos rótulos:

Comportamento atual:

<texto>

Comportamento esperado:

<texto>

Passos para reproduzir:
  1. <passo 1>
  2. <passo 2>
  3. <passo 3>

- "Passos para reproduzir" é uma lista numerada com "1.", "2.", "3.".
- Os passos começam com verbos no infinitivo (ex.: Acessar, Clicar, Preencher, Selecionar).
- Se algum bloco não se aplicar (ex.: não há passos claros), preencha com "Não informado".
- NÃO use "1 -", "1.1 -" ou bullets. A única lista permitida na descrição é a dos passos (1., 2., 3.).
- Contexto adicional relevante vai ao final de "Comportamento atual" ou "Comportamento esperado", sem criar novas seções.
"""

MELHORIA_TEMPLATE = """
### REGRAS OBRIGATÓRIAS PARA O CAMPO "description" quando a categoria for MELHORIA:
- A descrição DEVE seguir sempre este formato, nesta ordem e com os mesmos rótulos:

Contexto/Problema:

<texto>

Melhoria proposta:

<texto>

Resultado esperado:

<texto>

Critérios de aceitação:
  1. <critério 1>
  2. <critério 2>
  3. <critério 3>

- "Critérios de aceitação" é uma lista numerada com "1.", "2.", "3.".
- Os critérios começam com verbos no infinitivo (ex.: Exibir, Permitir, Bloquear, Validar, Registrar).
- Se algum bloco não se aplicar ou faltar informação, preencha com "Não informado".
- Não crie novas seções. Contexto adicional vai ao final de "Contexto/Problema" ou "Melhoria proposta".
"""

REQUISITO_TEMPLATE = """
### REGRAS OBRIGATÓRIAS PARA O CAMPO "description" quando a categoria for REQUISITO:
- A descrição DEVE seguir sempre este formato, nesta ordem e com os mesmos rótulos:

Objetivo:

<texto>

Descrição do requisito:

<texto>

Regras de negócio:

<texto>

Critérios de aceitação:
  1. <critério 1>
  2. <critério 2>
  3. <critério 3>

- "Critérios de aceitação" é uma lista numerada com "1.", "2.", "3.".
- Os critérios começam com verbos no infinitivo (ex.: Permitir, Impedir, Validar, Registrar, Notificar).
- Se algum bloco não se aplicar ou faltar informação, preencha com "Não informado".
- Não crie novas seções. Dependências, impactos ou observações vão ao final de "Descrição do requisito" ou "Regras de negócio".
"""

JSON_SHAPE = """{
  "title": "string",
  "category": "BUG" | "MELHORIA" | "REQUISITO",
  "description": "string",
  "additionalInformation": "string",
  "productId": "string" | null,
  "userIds": ["string"] | []
}"""

# Extra message parts around the media payload
DESCRIPTION_PREFIX = "\n\nDescrição fornecida:\n"
AUDIO_ONLY_INSTRUCTION = "\n\nPor favor, transcreva o áudio fornecido e processe as informações conforme o prompt acima."
AUDIO_WITH_TEXT_INSTRUCTION = "\n\nConsidere também o áudio fornecido para complementar a descrição em texto."
JSON_ONLY_INSTRUCTION = "\n\nRetorne APENAS o JSON válido:"


def format_product_line(p: Product) -> str:
    line = f"- ID: {p.id}, Nome: {p.project_name}"
    if p.sector:
        line += f", Setor: {p.sector}"
    return line


def format_user_line(u: User) -> str:
    line = f"- ID: {u.id}, Nome: {u.support_name}"
    if u.sector:
        line += f", Setor: {u.sector}"
    if u.discord_handle:
        line += f", Discord: @{u.discord_handle}"
    return line


def build_form_assistant_prompt(products: Iterable[Product], users: Iterable[User]) -> str:
    """
    Instruction prompt for turning a free-text (or transcribed audio) report into
    form fields. The catalog is embedded so the model can answer with known IDs.
    """
    products_list = "\n".join(format_product_line(p) for p in products)
    users_list = "\n".join(format_user_line(u) for u in users)

    return f"""Você é um assistente especializado em processar relatórios de bugs, melhorias e requisitos de produtos.
Analise a descrição fornecida e extraia as informações seguindo rigorosamente as regras abaixo:

### REGRAS DE COMPORTAMENTO E EXTRAÇÃO:
- Extração e Normalização: identifique o Produto, o Caminho em tela e o Resumo. Corrija erros comuns e padronize a capitalização de menus.
- Padronização de Título: o título deve seguir obrigatoriamente o formato "Produto > Caminho em tela: descrição resumida".
- Evidências: preserve todos os links de vídeos, prints ou arquivos do Discord. Insira imagens em Markdown ![](URL) exatamente como fornecidas.
- Tom e Estilo: objetivo, técnico e conciso. Não invente informações.

### IDENTIFICAÇÃO DE PRODUTOS E USUÁRIOS:
Analise o conteúdo fornecido (texto ou áudio transcrito) e verifique se há menções a produtos ou usuários da empresa.

PRODUTOS DISPONÍVEIS:
{products_list}

USUÁRIOS DISPONÍVEIS:
{users_list}

REGRAS PARA IDENTIFICAÇÃO:
1. Produto: cada report trata de UM ÚNICO produto. Considere variações de nome, abreviações e referências indiretas (ex.: "softcomshop" pode ser "SOFTCOMSHOP"). Retorne APENAS o ID do produto mais relevante. Sem menção clara, retorne null.
2. Usuários: identifique menções por nome de suporte, usuário do Discord (com ou sem @) ou referências indiretas. Pode haver vários. Retorne um array com os IDs; sem menções, retorne [].
3. Seja criterioso: só inclua IDs se tiver certeza de que foram mencionados.
{BUG_TEMPLATE}{MELHORIA_TEMPLATE}{REQUISITO_TEMPLATE}
### CAMPOS PARA EXTRAÇÃO (JSON):
1. title: título conciso no formato "Produto > Caminho: Descrição" (máximo 100 caracteres).
2. category: exatamente uma das opções "BUG", "MELHORIA" ou "REQUISITO".
3. description: texto obrigatório no formato da categoria, conforme acima.
4. additionalInformation: informações adicionais, links de evidências e referências de conversas (URLs de Discord/vídeo/prints que não caibam na descrição).
5. productId: string com o ID do produto identificado, ou null.
6. userIds: array de strings com os IDs dos usuários identificados, ou [].

### IMPORTANTE:
- Use português brasileiro em todas as respostas.
- Retorne APENAS um JSON válido, sem texto antes ou depois.
- Se informações essenciais faltarem e não puderem ser inferidas com confiança, use "Não informado".
- Não invente Produto, Caminho em tela, passos, comportamento esperado ou qualquer detalhe que não esteja explícito.
- Sem informações adicionais, retorne uma string vazia em "additionalInformation".

Formato JSON esperado:
{JSON_SHAPE}"""
