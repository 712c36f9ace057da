"""Static playbook table: canonical key -> template bundle + metadata.

Template prose lives here; schema, validation and lookup live in
``recommendations.playbook``. State-keyed templates use DetectionState names
plus ``default``.
"""

from __future__ import annotations

from typing import Any, Dict

# Renames from earlier scoring-model revisions (old key -> current key).
KEY_ALIASES: Dict[str, str] = {
    "ai_search_readiness.q_based_headings": "ai_search_readiness.query_intent_alignment",
    "ai_search_readiness.snippet_eligible_answers": "ai_search_readiness.evidence_proof_points",
    "ai_search_readiness.faq_score": "ai_search_readiness.icp_faqs",
    "ai_search_readiness.faq": "ai_search_readiness.icp_faqs",
    "ai_search_readiness.question_headings": "ai_search_readiness.query_intent_alignment",
    "technical_setup.sitemap": "technical_setup.sitemap_indexing",
    "technical_setup.open_graph": "technical_setup.social_meta_tags",
    "trust_authority.certifications": "trust_authority.professional_certifications",
    "ai_search_readiness.question_headings_score": "ai_search_readiness.query_intent_alignment",
    "technical_setup.structured_data_score": "technical_setup.structured_data_coverage",
    "technical_setup.sitemap_score": "technical_setup.sitemap_indexing",
    "technical_setup.open_graph_score": "technical_setup.social_meta_tags",
    "trust_authority.author_bios_score": "trust_authority.author_bios",
    "trust_authority.certifications_score": "trust_authority.professional_certifications",
    "content_structure.heading_hierarchy_score": "content_structure.semantic_heading_structure",
    "content_structure.navigation_score": "content_structure.navigation_clarity",
    "ai_readability.alt_text_score": "ai_readability.alt_text_coverage",
    "ai_readability.captions_transcripts_score": "ai_readability.media_accessibility",
}


PLAYBOOK_DATA: Dict[str, Dict[str, Any]] = {
    # ------------------------------------------------------------------
    # Technical Setup
    # ------------------------------------------------------------------
    "technical_setup.organization_schema": {
        "gap_label": "Missing Organization Schema",
        "priority": "P0",
        "effort": "S",
        "impact": "High",
        "automation_level": "generate",
        "generator_hook_key": "technical_setup.organization_schema",
        "evidence_selectors": [
            "technical.structuredData",
            "technical.hasOrganizationSchema",
            "metadata.ogImage",
            "content.headings.h1",
        ],
        "min_evidence": ["url", "technical.structuredData"],
        "ambiguity_rules": [
            {"selector": "technical.schemaParseErrors", "reason": "Some JSON-LD blocks could not be parsed"},
        ],
        "finding_templates": {
            "NOT_FOUND": "We checked {{pages_checked_count}} pages on {{domain}} and found no Organization schema. Detected schema types: {{detected_schemas}}.",
            "SCHEMA_INVALID": "{{domain}} publishes Organization schema, but it fails validation ({{error_summary}}).",
            "default": "Organization schema on {{domain}} is missing or incomplete.",
        },
        "why_it_matters_template": "Without Organization schema, AI assistants cannot confidently identify {{company_name}} as a verified business entity. This reduces your chances of being recommended when users ask about companies in your space.",
        "recommendation_template": {
            "SCHEMA_INVALID": "Fix the validation errors in your Organization JSON-LD so {{company_name}} is recognised as one verified entity.",
            "default": "Add a single Organization JSON-LD block for {{company_name}} to the global layout of {{domain}}.",
        },
        "what_to_include_template": "Legal name ({{company_name}}), canonical URL ({{site_url}}), logo, a short description, and sameAs links to your official profiles.",
        "action_items_template": [
            "Add the Organization JSON-LD schema to your website <head> section",
            "Include your company name, logo URL, and official website",
            "Add sameAs links to your official social media profiles",
            "Validate the schema using Google Rich Results Test",
        ],
        "examples_template": [
            '```json\n{\n  "@context": "https://schema.org",\n  "@type": "Organization",\n  "name": "{{company_name}}",\n  "url": "{{site_url}}",\n  "logo": "{{logo_url}}",\n  "sameAs": ["{{linkedin_url}}", "{{twitter_url}}"]\n}\n```',
        ],
    },
    "technical_setup.structured_data_coverage": {
        "gap_label": "Limited Structured Data Coverage",
        "priority": "P0",
        "effort": "M",
        "impact": "High",
        "automation_level": "guide",
        "evidence_selectors": [
            "technical.structuredData",
            "technical.hasOrganizationSchema",
            "technical.hasFAQSchema",
            "technical.hasArticleSchema",
            "technical.hasBreadcrumbSchema",
        ],
        "finding_templates": {
            "NOT_FOUND": "No structured data was detected across {{pages_checked_count}} pages on {{domain}}.",
            "PARTIAL": "{{domain}} has {{schema_count}} schema blocks ({{detected_schemas}}) but is missing {{missing_schemas}}.",
            "default": "Structured data coverage on {{domain}} is limited.",
        },
        "why_it_matters_template": "Your site has {{schema_count}} schema types, but AI assistants look for comprehensive structured data. Missing schemas mean AI cannot fully understand what {{company_name}} offers.",
        "recommendation_template": "Extend your schema markup to cover {{missing_schemas}}, starting with the pages that carry the most traffic.",
        "what_to_include_template": "Organization and WebSite on every page, BreadcrumbList on nested pages, FAQPage where Q&A content exists, and {{industry_specific_schema}} for your core offering.",
        "action_items_template": [
            "Audit existing schema markup using Google Rich Results Test",
            "Add Organization schema (if missing)",
            "Add WebSite and WebPage schema for core pages",
            "Consider adding Product, Service, or LocalBusiness schemas based on your business type",
            "Implement BreadcrumbList for navigation clarity",
        ],
        "examples_template": [
            "Priority schemas for {{industry}} businesses:\n1. Organization - Company identity\n2. WebSite - Site-level info + search box\n3. FAQPage - Common questions\n4. {{industry_specific_schema}} - Industry-specific visibility",
        ],
    },
    "technical_setup.sitemap_indexing": {
        "gap_label": "Missing or Incomplete Sitemap",
        "priority": "P0",
        "effort": "S",
        "impact": "High",
        "automation_level": "guide",
        "evidence_selectors": [
            "technical.hasSitemapLink",
            "crawler.sitemap.detected",
            "crawler.sitemap.urls",
        ],
        "finding_templates": {
            "NOT_FOUND": "No XML sitemap was found for {{domain}}, either linked from robots.txt or at the default location.",
            "PARTIAL": "A sitemap exists for {{domain}} but it lists no URLs.",
            "default": "The sitemap for {{domain}} could not be confirmed.",
        },
        "why_it_matters_template": "Without a complete sitemap, AI crawlers may miss important pages on {{domain}}, reducing your overall AI visibility.",
        "recommendation_template": {
            "PARTIAL": "Regenerate your sitemap so it lists every indexable page and keep it updated automatically.",
            "default": "Publish an XML sitemap at {{site_url}}/sitemap.xml and reference it from robots.txt.",
        },
        "what_to_include_template": "Every canonical, indexable URL with a lastmod date; exclude redirects, noindex pages and duplicates.",
        "action_items_template": [
            "Generate an XML sitemap including all important pages",
            "Submit sitemap to Google Search Console and Bing Webmaster Tools",
            "Add sitemap reference to robots.txt: Sitemap: {{site_url}}/sitemap.xml",
            "Ensure sitemap updates automatically when content changes",
        ],
        "examples_template": [
            "Add to robots.txt:\n```\nSitemap: {{site_url}}/sitemap.xml\n```",
            '```xml\n<?xml version="1.0" encoding="UTF-8"?>\n<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n  <url>\n    <loc>{{site_url}}/</loc>\n    <lastmod>{{current_date}}</lastmod>\n  </url>\n</urlset>\n```',
        ],
    },
    "technical_setup.social_meta_tags": {
        "gap_label": "Missing Open Graph & Social Meta Tags",
        "priority": "P1",
        "effort": "S",
        "impact": "Med-High",
        "automation_level": "generate",
        "generator_hook_key": "technical_setup.open_graph_tags",
        "evidence_selectors": [
            "metadata.ogTitle",
            "metadata.ogDescription",
            "metadata.ogImage",
            "metadata.twitterCard",
        ],
        "finding_templates": {
            "NOT_FOUND": "{{page_url}} has no Open Graph or Twitter Card tags.",
            "PARTIAL": "{{page_url}} has some social meta tags, but the set of og:title, og:description, og:image and twitter:card is incomplete.",
            "default": "Social meta tags on {{page_url}} are incomplete.",
        },
        "why_it_matters_template": "When {{company_name}} links are shared on social media or messaging apps, they appear as plain URLs without rich previews. This reduces click-through rates and brand recognition.",
        "recommendation_template": "Add a complete Open Graph and Twitter Card tag set to the <head> of {{page_url}}.",
        "what_to_include_template": "og:title, og:description, og:image (1200x630), og:url and twitter:card set to summary_large_image.",
        "action_items_template": [
            "Add og:title, og:description, og:image, og:url to page <head>",
            "Add Twitter Card meta tags (twitter:card, twitter:title, etc.)",
            "Use high-quality images (1200x630px recommended for og:image)",
            "Test with Facebook Sharing Debugger and Twitter Card Validator",
        ],
        "examples_template": [
            '```html\n<meta property="og:title" content="{{page_title}}">\n<meta property="og:description" content="{{page_description}}">\n<meta property="og:image" content="{{og_image_url}}">\n<meta property="og:url" content="{{page_url}}">\n<meta name="twitter:card" content="summary_large_image">\n```',
        ],
    },
    "technical_setup.canonical_hreflang": {
        "gap_label": "Missing Canonical or Hreflang Tags",
        "priority": "P1",
        "effort": "S",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "technical.hasCanonical",
            "technical.canonicalUrl",
            "technical.hreflangTags",
        ],
        "finding_templates": "Canonical tags were not confirmed on {{page_url}}.",
        "why_it_matters_template": "Missing canonical tags can cause duplicate content issues. AI systems may get confused about which version of your content is authoritative.",
        "recommendation_template": "Add a self-referencing canonical link to every page and hreflang alternates for translated versions.",
        "what_to_include_template": "",
        "action_items_template": [
            "Add self-referencing canonical tags to all pages",
            "For multi-language sites, implement hreflang tags",
            "Ensure canonical URLs match actual page URLs",
            "Audit for conflicting canonicals using SEO tools",
        ],
        "examples_template": [
            '```html\n<link rel="canonical" href="{{page_url}}">\n```',
        ],
    },
    "technical_setup.crawler_access": {
        "gap_label": "Crawler Access Issues",
        "priority": "P0",
        "effort": "S-M",
        "impact": "High",
        "automation_level": "manual",
        "evidence_selectors": [
            "crawler.robotsTxt",
            "performance.ttfb",
            "performance.responseTime",
        ],
        "min_evidence": ["crawler.robotsTxt", "performance.ttfb"],
        "ambiguity_rules": [
            {"selector": "crawler.robotsFetchError", "reason": "robots.txt could not be fetched"},
        ],
        "finding_templates": {
            "BLOCKING": "robots.txt on {{domain}} disallows one or more AI crawlers (GPTBot, CCBot, Google-Extended, anthropic-ai, ClaudeBot).",
            "PARTIAL": "AI crawlers are not blocked on {{domain}}, but the server responded slowly (TTFB {{ttfb}}).",
            "default": "Crawler access to {{domain}} could not be fully confirmed.",
        },
        "why_it_matters_template": "AI crawlers may be blocked from accessing your content. If crawlers cannot reach your pages, your content will not appear in AI recommendations.",
        "recommendation_template": {
            "BLOCKING": "Remove the Disallow rules that target AI crawlers in robots.txt.",
            "default": "Confirm AI crawlers are allowed and bring server response time under 500 ms.",
        },
        "what_to_include_template": "Explicit Allow rules for AI user agents, a Sitemap line, and no blanket Disallow for the site root.",
        "action_items_template": [
            "Review robots.txt for overly restrictive rules",
            "Ensure GPTBot, CCBot, and other AI crawlers are not blocked",
            "Check server response times (should be under 500ms)",
            "Verify no authentication or geo-blocking issues",
        ],
        "examples_template": [
            "Recommended robots.txt:\n```\nUser-agent: *\nAllow: /\n\nUser-agent: GPTBot\nAllow: /\n\nSitemap: {{site_url}}/sitemap.xml\n```",
        ],
    },
    # ------------------------------------------------------------------
    # AI Search Readiness
    # ------------------------------------------------------------------
    "ai_search_readiness.icp_faqs": {
        "gap_label": "Missing ICP-Specific FAQs",
        "priority": "P0",
        "effort": "M",
        "impact": "High",
        "automation_level": "generate",
        "generator_hook_key": "ai_search_readiness.icp_faqs",
        "evidence_selectors": [
            "content.faqs",
            "technical.hasFAQSchema",
            "navigation.keyPages.faq",
            "crawler.discoveredSections.hasFaqUrl",
        ],
        "min_evidence": ["content.faqs", "technical.hasFAQSchema"],
        "disqualifiers": [
            {"selector": "content.faqSource", "pattern": "accordion|menu", "reason": "FAQ candidates came from accordion or menu widgets"},
        ],
        "finding_templates": {
            "NOT_FOUND": "We checked {{pages_checked_count}} pages on {{domain}} and found no FAQ content.",
            "CONTENT_NO_SCHEMA": "{{domain}} has {{faq_count}} FAQ items, but none are marked up with FAQPage schema.",
            "PARTIAL": "{{domain}} has FAQPage schema, but only {{faq_count}} questions, fewer than the five buyers expect.",
            "default": "FAQ coverage on {{domain}} is limited.",
        },
        "why_it_matters_template": "Your site lacks FAQ content tailored to {{icp_roles}}. When these buyers ask AI assistants about {{industry}} solutions, competitors with comprehensive FAQs get recommended instead.",
        "recommendation_template": {
            "CONTENT_NO_SCHEMA": "Wrap your existing FAQ content in FAQPage JSON-LD and expand it to at least five questions.",
            "default": "Publish an FAQ section answering the questions {{icp_roles}} ask about {{product_type}}, marked up with FAQPage schema.",
        },
        "what_to_include_template": "Five to ten questions phrased the way {{icp_roles}} search, each with a direct two to three sentence answer.",
        "action_items_template": [
            "Create an FAQ section addressing common {{icp_roles}} questions",
            "Add FAQPage schema markup to your FAQ content",
            "Include questions that match how your ICP searches (natural language)",
            "Update FAQs regularly based on customer inquiries",
        ],
        "examples_template": [
            'FAQ questions for {{industry}} {{icp_roles}}:\n- "What is the typical ROI of {{product_type}}?"\n- "How long does {{product_type}} implementation take?"\n- "What integrations does {{company_name}} support?"',
        ],
    },
    "ai_search_readiness.query_intent_alignment": {
        "gap_label": "Missing Question-Based Headings",
        "priority": "P1",
        "effort": "S-M",
        "impact": "High",
        "automation_level": "draft",
        "evidence_selectors": [
            "content.headings",
            "structure.headingCount",
            "content.faqs",
        ],
        "finding_templates": {
            "NOT_FOUND": "None of the {{heading_count}} headings on {{page_url}} are phrased as questions.",
            "PARTIAL": "A few of the {{heading_count}} headings on {{page_url}} are questions, but most are labels.",
            "default": "Headings on {{page_url}} do not mirror how buyers phrase questions.",
        },
        "why_it_matters_template": "AI assistants match user questions to content headings. Your pages use {{heading_count}} headings, but few are phrased as questions. This reduces your match rate for conversational AI queries.",
        "recommendation_template": "Rewrite key H2 and H3 headings as the questions your buyers ask, with the answer directly underneath.",
        "what_to_include_template": "How, what, why and when questions that match real queries, each followed by a one-paragraph answer.",
        "action_items_template": [
            "Rewrite key H2/H3 headings as questions (How, What, Why, When)",
            "Research common questions using AlsoAsked or AnswerThePublic",
            "Ensure answers appear immediately after question headings",
            "Structure content to provide direct, quotable answers",
        ],
        "examples_template": [
            'Transform headings:\n- Before: "Our Pricing"\n- After: "How Much Does {{product_name}} Cost?"',
        ],
    },
    "ai_search_readiness.evidence_proof_points": {
        "gap_label": "Weak Evidence & Proof Points",
        "priority": "P1",
        "effort": "M",
        "impact": "Med-High",
        "automation_level": "guide",
        "evidence_selectors": [
            "content.paragraphs",
            "content.bodyText",
            "entities.metrics",
        ],
        "finding_templates": {
            "NOT_FOUND": "Content on {{page_url}} has no statistics, case studies or customer testimonials.",
            "PARTIAL": "Content on {{page_url}} has some proof points, but lacks either measurable results or customer voice.",
            "default": "Proof points on {{page_url}} are thin.",
        },
        "why_it_matters_template": "AI assistants prefer to cite content with clear evidence and proof points. Your content lacks specific numbers, case studies, or verifiable claims that make it citation-worthy.",
        "recommendation_template": "Add quantified outcomes and named customer testimonials to the pages that describe {{product_name}}.",
        "what_to_include_template": "Specific percentages or multipliers, at least one case study with a measurable result, and attributed customer quotes.",
        "action_items_template": [
            'Add specific statistics and metrics (e.g., "95% uptime", "2x faster")',
            "Include customer testimonials with names and companies",
            "Reference third-party studies or industry benchmarks",
            "Create case studies with measurable outcomes",
        ],
        "examples_template": [
            'Add proof points:\n- "Trusted by 500+ {{industry}} companies"\n- "Reduces {{pain_point}} by 40% on average"',
        ],
    },
    "ai_search_readiness.pillar_pages": {
        "gap_label": "No Pillar/Cluster Content Structure",
        "priority": "P1",
        "effort": "L",
        "impact": "High",
        "automation_level": "guide",
        "evidence_selectors": [
            "structure.internalLinks",
            "crawler.totalDiscoveredUrls",
            "content.wordCount",
        ],
        "finding_templates": "{{domain}} has no comprehensive pillar pages that anchor a topic cluster.",
        "why_it_matters_template": "Your site lacks comprehensive pillar pages that establish topical authority. AI assistants look for sites that thoroughly cover topics, not just individual keywords.",
        "recommendation_template": "Build a pillar page for each core topic and link supporting articles back to it.",
        "what_to_include_template": "",
        "action_items_template": [
            "Identify 3-5 core topics relevant to your business",
            "Create comprehensive pillar pages (2000+ words) for each topic",
            "Build cluster content linking back to pillar pages",
            "Interlink related content to show topical depth",
        ],
        "examples_template": [
            'Pillar page structure for {{company_name}}:\n- Pillar: "Complete Guide to {{topic}}"\n  - Cluster: "{{topic}} Best Practices"\n  - Cluster: "{{topic}} Implementation Guide"',
        ],
    },
    "ai_search_readiness.scannability": {
        "gap_label": "Poor Content Scannability",
        "priority": "P2",
        "effort": "S",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "content.paragraphs",
            "content.lists",
            "structure.headingCount",
        ],
        "finding_templates": "Content on {{page_url}} relies on long paragraphs with few lists or subheadings.",
        "why_it_matters_template": "Your content has long paragraphs and limited formatting. AI assistants prefer scannable content with clear structure: bullet points, short paragraphs, and visual breaks.",
        "recommendation_template": "Break long passages into short paragraphs, lists and subheaded sections.",
        "what_to_include_template": "",
        "action_items_template": [
            "Break paragraphs into 2-3 sentences max",
            "Use bullet points and numbered lists for key information",
            "Add subheadings every 200-300 words",
            "Use bold text for key terms and phrases",
        ],
        "examples_template": [],
    },
    # ------------------------------------------------------------------
    # Trust & Authority
    # ------------------------------------------------------------------
    "trust_authority.author_bios": {
        "gap_label": "Missing Author & Team Credentials",
        "priority": "P1",
        "effort": "S-M",
        "impact": "Med-High",
        "automation_level": "guide",
        "evidence_selectors": [
            "metadata.author",
            "content.paragraphs",
            "navigation.keyPages.about",
            "entities.entities.people",
        ],
        "finding_templates": {
            "NOT_FOUND": "No author bylines, team pages or named experts were detected on {{domain}}.",
            "PARTIAL": "{{domain}} shows some authorship signals, but content is not tied to named experts with credentials.",
            "default": "Author credentials on {{domain}} are not visible.",
        },
        "why_it_matters_template": "AI assistants evaluate E-E-A-T (Experience, Expertise, Authority, Trust) signals. {{company_name}} content lacks visible author credentials, reducing AI confidence in your expertise.",
        "recommendation_template": "Attribute content to named experts and publish a bio for each with their credentials.",
        "what_to_include_template": "Name, role, years of experience, relevant certifications and a profile link for every author.",
        "action_items_template": [
            "Add author bylines to blog posts and articles",
            "Create detailed team/about page with credentials",
            "Include LinkedIn links for team members",
            "Add Person schema for key authors",
        ],
        "examples_template": [
            'Author bio template:\n"{{author_name}} is the {{author_title}} at {{company_name}} with {{years}} years of experience in {{industry}}."',
        ],
    },
    "trust_authority.professional_certifications": {
        "gap_label": "Missing Industry Certifications",
        "priority": "P1",
        "effort": "M",
        "impact": "Med-High",
        "automation_level": "manual",
        "evidence_selectors": [
            "content.bodyText",
            "entities.entities.professionalCredentials",
        ],
        "finding_templates": "No industry certifications are displayed on {{domain}}.",
        "why_it_matters_template": "Your site does not prominently display industry certifications. For {{industry}} businesses, certifications like {{relevant_certs}} signal credibility to both AI and human evaluators.",
        "recommendation_template": "Display the certifications you hold ({{relevant_certs}}) on your homepage and About page.",
        "what_to_include_template": "Certification name, issuing body, date achieved and a verification link where available.",
        "action_items_template": [
            "Display relevant industry certifications on homepage",
            "Add certification badges to footer or trust bar",
            "Include certifications in About page and schema markup",
            "Pursue additional certifications relevant to your industry",
        ],
        "examples_template": [],
    },
    "trust_authority.third_party_profiles": {
        "gap_label": "Missing Third-Party Verification",
        "priority": "P2",
        "effort": "M",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "technical.structuredData",
            "entities.entities.organizations",
        ],
        "finding_templates": "{{company_name}} is not linked to review sites or directories from {{domain}}.",
        "why_it_matters_template": "AI cross-references your claims with third-party sources. {{company_name}} lacks visible presence on review sites, directories, and industry publications that validate your business.",
        "recommendation_template": "Claim your third-party profiles and link them from your Organization schema sameAs list.",
        "what_to_include_template": "",
        "action_items_template": [
            "Claim profiles on G2, Capterra, and industry directories",
            "Request customer reviews on third-party platforms",
            "Add sameAs links in Organization schema to verified profiles",
            "Seek mentions in industry publications and analyst reports",
        ],
        "examples_template": [],
    },
    "trust_authority.thought_leadership": {
        "gap_label": "Limited Thought Leadership Content",
        "priority": "P2",
        "effort": "L",
        "impact": "Med-High",
        "automation_level": "guide",
        "evidence_selectors": [
            "crawler.discoveredSections.hasBlogUrl",
            "navigation.keyPages.blog",
            "content.wordCount",
        ],
        "finding_templates": "No blog, research or insights section was found on {{domain}}.",
        "why_it_matters_template": "AI assistants favor sources that demonstrate original thinking and expertise. {{company_name}} lacks blog, research, or insights content that establishes thought leadership.",
        "recommendation_template": "Start a regular publishing cadence of original insight on {{topic}}.",
        "what_to_include_template": "",
        "action_items_template": [
            "Start a regular blog covering industry trends",
            "Publish original research or data studies",
            "Create in-depth guides on complex topics",
            "Share expert perspectives on industry news",
        ],
        "examples_template": [
            'Content ideas for {{company_name}}:\n- "{{year}} {{industry}} Trends Report"\n- "Expert Guide to {{topic}}"',
        ],
    },
    # ------------------------------------------------------------------
    # AI Readability
    # ------------------------------------------------------------------
    "ai_readability.alt_text_coverage": {
        "gap_label": "Incomplete Image Alt Text",
        "priority": "P1",
        "effort": "S",
        "impact": "Med-High",
        "automation_level": "guide",
        "evidence_selectors": [
            "media.images",
            "media.imagesWithAlt",
            "media.imagesWithoutAlt",
        ],
        "min_evidence": ["media.imageCount", "media.imagesWithAlt"],
        "ambiguity_rules": [
            {"selector": "media.lazyLoadedImages", "reason": "Lazy-loaded images may not have been counted"},
        ],
        "finding_templates": {
            "NOT_FOUND": "None of the {{total_images}} images on {{page_url}} have alt text.",
            "WEAK": "Only {{images_with_alt}} of {{total_images}} images on {{page_url}} have alt text.",
            "PARTIAL": "{{images_without_alt}} of {{total_images}} images on {{page_url}} still lack alt text.",
            "default": "Some images on {{page_url}} lack alt text.",
        },
        "why_it_matters_template": "{{images_without_alt}} of {{total_images}} images on your site lack alt text. Multimodal AI assistants now analyze images, and missing alt text means lost opportunities for visual search citations.",
        "recommendation_template": "Write descriptive alt text for the {{images_without_alt}} images that are missing it.",
        "what_to_include_template": "What the image shows and why it is on the page, in 5 to 125 characters, without filler such as 'image of'.",
        "action_items_template": [
            "Audit all images for missing or generic alt text",
            "Write descriptive alt text (5-125 characters)",
            'Avoid generic text like "image" or "photo"',
            "Include relevant keywords naturally",
        ],
        "examples_template": [
            'Alt text examples:\n- Bad: "image.jpg"\n- Good: "{{company_name}} engineering team collaborating on product development"',
        ],
    },
    "ai_readability.media_accessibility": {
        "gap_label": "Missing Video Captions/Transcripts",
        "priority": "P2",
        "effort": "M",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "media.videos",
            "media.videoCount",
        ],
        "finding_templates": "Videos on {{page_url}} have no captions or transcripts.",
        "why_it_matters_template": "Your videos lack captions and transcripts. AI assistants cannot analyze video content without text alternatives, missing valuable content that could boost your visibility.",
        "recommendation_template": "Publish captions and a text transcript alongside every video.",
        "what_to_include_template": "",
        "action_items_template": [
            "Add closed captions to all videos",
            "Provide text transcripts for audio/video content",
            "Use auto-captioning tools as a starting point",
            "Include VideoObject schema with transcript property",
        ],
        "examples_template": [],
    },
    # ------------------------------------------------------------------
    # Content Structure
    # ------------------------------------------------------------------
    "content_structure.semantic_heading_structure": {
        "gap_label": "Poor Heading Hierarchy",
        "priority": "P1",
        "effort": "S",
        "impact": "Med-High",
        "automation_level": "guide",
        "evidence_selectors": [
            "structure.headingHierarchy",
            "structure.headingCount",
            "content.headings",
        ],
        "finding_templates": "Heading structure on {{page_url}} has issues: {{heading_issues}}.",
        "why_it_matters_template": "Your page has heading structure issues: {{heading_issues}}. AI assistants use headings to understand content organization. Broken hierarchy reduces comprehension.",
        "recommendation_template": "Use one H1 per page and nest H2 to H4 without skipping levels.",
        "what_to_include_template": "",
        "action_items_template": [
            "Use single H1 per page for main title",
            "Follow logical H2 -> H3 -> H4 nesting",
            "Do not skip heading levels (e.g., H1 to H3)",
            "Make headings descriptive of section content",
        ],
        "examples_template": [
            "Proper hierarchy:\n```\nH1: {{page_title}}\n  H2: Feature Overview\n    H3: Feature 1\n  H2: Pricing\n```",
        ],
    },
    "content_structure.navigation_clarity": {
        "gap_label": "Poor Navigation Structure",
        "priority": "P2",
        "effort": "M",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "navigation.allNavLinks",
            "structure.hasNav",
            "structure.hasBreadcrumbs",
        ],
        "finding_templates": "Navigation on {{domain}} lacks clear structure for crawlers.",
        "why_it_matters_template": "AI crawlers use navigation to understand site structure. Your site lacks clear navigation elements that help both users and AI find content efficiently.",
        "recommendation_template": "Use semantic <nav> elements with breadcrumbs on nested pages.",
        "what_to_include_template": "",
        "action_items_template": [
            "Implement consistent main navigation across pages",
            "Add breadcrumb navigation for multi-level pages",
            "Include footer navigation with key links",
            "Use semantic <nav> elements",
        ],
        "examples_template": [],
    },
    "content_structure.entity_cues": {
        "gap_label": "Weak Entity Recognition Signals",
        "priority": "P2",
        "effort": "S-M",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "entities.entities",
            "entities.metrics",
            "content.bodyText",
        ],
        "finding_templates": "Content on {{page_url}} gives few clear entity signals.",
        "why_it_matters_template": "AI relies on entity recognition to understand your content. Your pages lack clear entity signals (proper nouns, defined terms) that help AI identify key topics.",
        "recommendation_template": "Name products, people and organisations consistently and define terms on first use.",
        "what_to_include_template": "",
        "action_items_template": [
            "Use consistent naming for products and services",
            "Capitalize proper nouns consistently",
            "Define acronyms and technical terms on first use",
            "Add structured data for key entities",
        ],
        "examples_template": [],
    },
    # ------------------------------------------------------------------
    # Voice Optimization
    # ------------------------------------------------------------------
    "voice_optimization.conversational_content": {
        "gap_label": "Non-Conversational Content Style",
        "priority": "P2",
        "effort": "M",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "content.bodyText",
            "content.faqs",
        ],
        "finding_templates": "Copy on {{page_url}} reads formally and rarely addresses the reader directly.",
        "why_it_matters_template": "Your content uses formal language that does not match how people ask questions verbally. Voice assistants favor conversational content that mirrors natural speech.",
        "recommendation_template": "Rewrite key passages in a second-person, conversational voice.",
        "what_to_include_template": "",
        "action_items_template": [
            "Write in a conversational, second-person style",
            "Include natural language question phrases",
            'Use "you" and "your" to address readers directly',
            "Avoid jargon and overly technical language",
        ],
        "examples_template": [],
    },
    "voice_optimization.local_intent": {
        "gap_label": "Missing Local/Geographic Content",
        "priority": "P2",
        "effort": "S-M",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "metadata.geoRegion",
            "metadata.geoPlacename",
            "technical.hasLocalBusinessSchema",
        ],
        "finding_templates": "{{domain}} carries no geographic signals such as service areas or locations.",
        "why_it_matters_template": "Near-me and location-based voice queries are growing. Your content lacks geographic signals that help AI recommend you for local searches.",
        "recommendation_template": "Describe where you operate and add LocalBusiness schema for physical locations.",
        "what_to_include_template": "",
        "action_items_template": [
            "Add location information to key pages",
            "Create city/region-specific landing pages if relevant",
            "Include service area in structured data",
            "Use LocalBusiness schema for physical locations",
        ],
        "examples_template": [],
    },
    # ------------------------------------------------------------------
    # Content Freshness
    # ------------------------------------------------------------------
    "content_freshness.last_updated": {
        "gap_label": "Outdated or Undated Content",
        "priority": "P2",
        "effort": "S",
        "impact": "Med",
        "automation_level": "guide",
        "evidence_selectors": [
            "metadata.lastModified",
            "technical.lastModified",
            "metadata.publishedTime",
        ],
        "finding_templates": "{{page_url}} shows no visible last-updated date.",
        "why_it_matters_template": "AI assistants consider content freshness when making recommendations. Your content lacks visible update dates, making it appear potentially stale.",
        "recommendation_template": "Show a last-updated date on major content and mirror it in dateModified.",
        "what_to_include_template": "",
        "action_items_template": [
            'Add "Last Updated" dates to all major content',
            "Include dateModified in Article schema",
            "Set appropriate HTTP cache headers",
            "Establish content review schedule",
        ],
        "examples_template": [
            'Date display pattern:\n"Last updated: {{last_updated_date}}"',
        ],
    },
    # ------------------------------------------------------------------
    # Speed & UX
    # ------------------------------------------------------------------
    "speed_ux.performance": {
        "gap_label": "Slow Page Performance",
        "priority": "P2",
        "effort": "M-L",
        "impact": "Med",
        "automation_level": "manual",
        "evidence_selectors": [
            "performance.ttfb",
            "performance.responseTime",
        ],
        "finding_templates": "{{page_url}} responded with a time to first byte of {{ttfb}}.",
        "why_it_matters_template": "Slow pages (TTFB: {{ttfb}}) reduce crawler efficiency and may signal poor quality to AI systems. Fast sites get crawled more completely.",
        "recommendation_template": "Bring server response time under 200 ms with caching and a CDN.",
        "what_to_include_template": "",
        "action_items_template": [
            "Optimize server response time (target <200ms TTFB)",
            "Implement browser caching for static assets",
            "Use a CDN for global content delivery",
            "Optimize images and enable lazy loading",
        ],
        "examples_template": [],
    },
}


__all__ = ["KEY_ALIASES", "PLAYBOOK_DATA"]
