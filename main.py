import json
import sys

import config
from catalog import load_catalog
from gemini_engine import ReportAssistant
from schemas import AssistantRequest


def main():
    print("Assistente de IA: descreva o bug, melhoria ou requisito.\n")

    if not config.api_key_configured(config.GEMINI_API_KEY):
        print("GEMINI_API_KEY não configurada. Configure a variável no arquivo .env")
        return 1

    products, users = load_catalog(config.PRODUCTS_PATH, config.USERS_PATH)
    assistant = ReportAssistant(config.GEMINI_API_KEY, config.GEMINI_MODEL, products, users)

    description = input("Descrição:\n> ")

    print("\nProcessando...")
    result = assistant.process_report(AssistantRequest(description=description))

    if not result.success:
        print(f"Não foi possível gerar o relatório: {result.error} ({result.processed_in})")
        return 1

    data = result.data
    print("\n--- Relatório ---\n")
    print(f"Título: {data.title}")
    print(f"Categoria: {data.category}")
    if data.product:
        print(f"Produto: {data.product.project_name} (ID {data.product.id})")
    if data.users:
        print("Usuários: " + ", ".join(u.support_name for u in data.users))
    print(f"\n{data.description}\n")
    if data.additional_information:
        print(f"Informações adicionais: {data.additional_information}\n")
    print(json.dumps(result.to_json(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
